from brand_migrator.exception.MigrationError import MigrationError


class FixtureError(MigrationError):
    """Raised when the dirty fixture file is missing or malformed."""
    def __init__(self, message):
        super().__init__(message)
