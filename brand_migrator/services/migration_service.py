"""Brand migration pipeline.

Seven sequential steps, each completing before the next begins:

    1/7 connect      (run_all)
    2/7 clear        MigrationService.clear_collection
    3/7 import       MigrationService.import_dirty_data
    4/7 transform    MigrationService.transform_data
    5/7 seed         MigrationService.seed_new_data
    6/7 export       MigrationService.export_data
    7/7 disconnect   (run_all)

A connection failure stops the run before step 2. Any error in steps 2-6 is
logged, the remaining steps are skipped, and the session is still closed.
Both paths return a non-zero exit status.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pymongo.errors import PyMongoError

from brand_mongo import MongoSession
from brand_migrator.exception.DatabaseConnectionError import DatabaseConnectionError
from brand_migrator.exception.MigrationError import MigrationError
from brand_migrator.repository.brand_repository import BrandRepository
from brand_migrator.utils.fixtures import load_fixture, export_documents
from brand_migrator.utils.generator import BrandGenerator
from brand_migrator.utils.normalizers import normalize_brand, alias_keys_to_unset
from brand_migrator.utils.time_utils import current_year as get_current_year

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class MigrationService:
    def __init__(self, repository: BrandRepository, current_year: int, generator: Optional[BrandGenerator] = None):
        self.repository = repository
        self.current_year = current_year
        self.generator = generator or BrandGenerator(current_year)

    def clear_collection(self) -> int:
        logger.info(f'2/7: Clearing the "{self.repository.collection_name}" collection...')
        deleted = self.repository.clear()
        logger.info(f'Collection cleared ({deleted} documents removed).')
        return deleted

    def import_dirty_data(self, records: List[Dict[str, Any]]) -> List[Any]:
        logger.info(f'3/7: Importing {len(records)} dirty documents...')
        ids = self.repository.insert_raw(records)
        logger.info('Dirty data imported.')
        return ids

    def transform_data(self, documents: Optional[List[Dict[str, Any]]] = None) -> int:
        """Normalize staged documents in place, one at a time, in the given order.

        When ``documents`` is None the current collection contents are captured
        first as an explicit list ordered by _id.
        """
        if documents is None:
            documents = self.repository.find()
        logger.info(f'4/7: Transforming {len(documents)} documents in-place...')
        transformed_count = 0
        for doc in documents:
            transformed = normalize_brand(doc, self.current_year)
            logger.debug(f'  {doc.get("_id")}: {transformed}')
            self.repository.update({'_id': doc['_id']}, transformed, unset_fields=alias_keys_to_unset(doc))
            transformed_count += 1
        logger.info(f'{transformed_count} documents transformed.')
        return transformed_count

    def seed_new_data(self, count: int) -> List[Any]:
        if count < 0:
            raise MigrationError(f'Seed count must be >= 0, got {count}')
        logger.info(f'5/7: Seeding {count} new valid documents...')
        ids = self.repository.create_many(self.generator.generate_brands(count))
        logger.info(f'{len(ids)} new brands seeded.')
        return ids

    def export_data(self, export_path) -> List[Dict[str, Any]]:
        documents = self.repository.find()
        logger.info(f'6/7: Exporting all {len(documents)} documents...')
        path = export_documents(documents, export_path)
        logger.info(f'Export complete! File created at: {path}')
        return documents

    def run(self, records: List[Dict[str, Any]], seed_count: int, export_path) -> List[Dict[str, Any]]:
        """Steps 2-6 against an already connected session."""
        self.clear_collection()
        ids = self.import_dirty_data(records)
        staged = self.repository.find({'_id': {'$in': ids}}) if ids else []
        self.transform_data(staged)
        self.seed_new_data(seed_count)
        return self.export_data(export_path)


def run_all(settings, fixture_path=None, export_path=None, seed_count: Optional[int] = None,
            seed: Optional[int] = None, session: Optional[MongoSession] = None) -> int:
    """Run the full migration and return the process exit status."""
    fixture_path = Path(fixture_path or settings.FIXTURE_PATH)
    export_path = Path(export_path or settings.EXPORT_PATH)
    seed_count = settings.SEED_COUNT if seed_count is None else seed_count

    if session is None:
        session = MongoSession(settings.MONGO_URI, settings.MONGO_DB_NAME, timeout_ms=settings.MONGO_TIMEOUT_MS)

    try:
        session.connect()
    except DatabaseConnectionError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    logger.info('1/7: Successfully connected to MongoDB.')

    exit_code = EXIT_OK
    try:
        year = get_current_year(settings.DEFAULT_TIMEZONE)
        repository = BrandRepository(session, year, collection_name=settings.BRANDS_COLLECTION)
        generator = BrandGenerator(year, min_year=settings.SEED_MIN_YEAR,
                                   max_locations=settings.SEED_MAX_LOCATIONS, seed=seed)
        service = MigrationService(repository, year, generator=generator)
        records = load_fixture(fixture_path)
        service.run(records, seed_count, export_path)
    except (MigrationError, PyMongoError) as e:
        logger.error(f'An error occurred during the process: {e}')
        exit_code = EXIT_FAILURE
    except Exception as e:
        logger.exception(f'An unexpected error occurred during the process: {e}')
        exit_code = EXIT_FAILURE
    finally:
        session.close()
        logger.info('7/7: Disconnected from MongoDB.')
    return exit_code
