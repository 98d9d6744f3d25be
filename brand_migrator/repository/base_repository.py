from abc import ABC, abstractmethod


class BaseRepository(ABC):
    """Operations every brand store exposes to the migration steps."""

    @abstractmethod
    def create(self, data):
        """Validate and insert one canonical brand."""
        pass

    @abstractmethod
    def find(self, query=None):
        """Return the brands matching the query, ordered by _id."""
        pass

    @abstractmethod
    def find_one(self, query):
        pass

    @abstractmethod
    def update(self, query, update_fields):
        """Validate canonical fields and $set them on the matching brand."""
        pass

    @abstractmethod
    def delete(self, query):
        pass

    @abstractmethod
    def clear(self):
        """Remove every brand; returns the number deleted."""
        pass
