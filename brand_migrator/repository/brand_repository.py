import logging
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ASCENDING

from brand_migrator.exception.BrandValidationError import BrandValidationError
from brand_migrator.repository.base_repository import BaseRepository
from brand_migrator.utils.time_utils import utc_now
from brand_migrator.utils.validation import validate_brand, trim_text_fields

logger = logging.getLogger(__name__)


class BrandRepository(BaseRepository):
    """Access to the brands collection.

    Raw inserts (insert_raw) bypass validation so dirty fixture records can be
    staged. Every canonical write (create, create_many, update) is validated
    against the brand schema and stamped with createdAt/updatedAt.
    """

    def __init__(self, session, current_year: int, collection_name: str = 'brands'):
        self.collection_name = collection_name
        self.current_year = current_year
        self.collection = session.get_collection(collection_name)

    def _validated(self, data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        data = trim_text_fields(data)
        ok, errors = validate_brand(data, self.current_year, partial=partial)
        if not ok:
            raise BrandValidationError(errors)
        return data

    def clear(self) -> int:
        result = self.collection.delete_many({})
        return result.deleted_count

    def insert_raw(self, documents: Iterable[Dict[str, Any]]) -> List[Any]:
        documents = list(documents)
        if not documents:
            return []
        result = self.collection.insert_many(documents, ordered=True)
        return list(result.inserted_ids)

    def create(self, data):
        doc = self._validated(data)
        now = utc_now()
        doc['createdAt'] = now
        doc['updatedAt'] = now
        return self.collection.insert_one(doc)

    def create_many(self, documents: Iterable[Dict[str, Any]]) -> List[Any]:
        """Validate every brand first, then insert them in one batch."""
        docs = [self._validated(d) for d in documents]
        if not docs:
            return []
        now = utc_now()
        for doc in docs:
            doc['createdAt'] = now
            doc['updatedAt'] = now
        result = self.collection.insert_many(docs, ordered=True)
        return list(result.inserted_ids)

    def find(self, query=None):
        return list(self.collection.find(query or {}).sort('_id', ASCENDING))

    def find_one(self, query):
        return self.collection.find_one(query)

    def update(self, query, update_fields, unset_fields: Optional[Iterable[str]] = None):
        fields = self._validated(update_fields, partial=True)
        fields['updatedAt'] = utc_now()
        update = {'$set': fields}
        if unset_fields:
            update['$unset'] = {k: '' for k in unset_fields}
        result = self.collection.update_one(query, update)
        return result.modified_count

    def delete(self, query):
        return self.collection.delete_many(query).deleted_count
