import logging
from typing import Any, Dict, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from brand_migrator.exception.DatabaseConnectionError import DatabaseConnectionError

logger = logging.getLogger(__name__)


class MongoSession:
    """Explicit handle on one MongoDB database for the length of a run.

    Acquired with connect() (or a ``with`` block) and passed to every step that
    touches the store. close() never raises; failures are logged.
    """

    def __init__(self, uri: Optional[str], db_name: str, timeout_ms: int = 5000, client_factory=MongoClient):
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory
        self.client = None
        self.db = None

    def connect(self) -> 'MongoSession':
        """Open the client and ping the server so an unreachable store fails here."""
        if not self.uri:
            raise DatabaseConnectionError('MONGODB_URI is not defined in the environment or config')
        try:
            self.client = self._client_factory(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
            self.client.admin.command('ping')
        except PyMongoError as e:
            self.close()
            raise DatabaseConnectionError(f'Failed to connect to MongoDB on startup: {e}') from e
        self.db = self.client[self.db_name]
        logger.debug(f'[MongoSession] Connected to DB: {self.db_name}')
        return self

    def close(self) -> None:
        if self.client is None:
            return
        try:
            self.client.close()
        except Exception as e:
            logger.error(f'Failed to disconnect from MongoDB: {e}')
        finally:
            self.client = None
            self.db = None

    def get_collection(self, collection_name: str):
        if self.db is None:
            raise DatabaseConnectionError('Database connection is not established.')
        return self.db[collection_name]

    def info(self) -> Dict[str, Any]:
        return {'db': self.db_name, 'connected': self.db is not None}

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
