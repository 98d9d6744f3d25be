"""Fixture loading and collection export.

The dirty fixture is a JSON array written in MongoDB Extended JSON, so
``{"_id": {"$oid": "..."}}`` is turned back into a real ObjectId and the
identifier survives the import verbatim. The export is plain, indented JSON
with ObjectIds and datetimes rendered as strings.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

from bson import json_util
from bson.errors import InvalidId

from brand_migrator.exception.FixtureError import FixtureError
from brand_migrator.exception.MigrationError import MigrationError
from brand_migrator.utils.helpers import normalize_doc

logger = logging.getLogger(__name__)


def load_fixture(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read the dirty brand fixture; every record must carry an ``_id``."""
    path = Path(path)
    if not path.exists():
        raise FixtureError(f'Fixture file not found: {path}')

    try:
        with open(path, 'r', encoding='utf-8') as f:
            records = json_util.loads(f.read())
    except (ValueError, InvalidId) as e:
        raise FixtureError(f'Malformed fixture file {path}: {e}') from e

    if not isinstance(records, list):
        raise FixtureError(f'Fixture {path} must contain a JSON array, got {type(records).__name__}')

    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise FixtureError(f'Fixture record #{i} is not an object')
        if '_id' not in rec:
            raise FixtureError(f'Fixture record #{i} has no _id')

    ids = [rec['_id'] for rec in records]
    if len(set(ids)) != len(ids):
        raise FixtureError(f'Fixture {path} contains duplicate _id values')

    logger.debug(f'Loaded {len(records)} records from {path}')
    return records


def export_documents(documents: List[Dict[str, Any]], path: Union[str, Path]) -> Path:
    """Write documents to ``path`` as indented JSON and return the path."""
    path = Path(path)
    try:
        os.makedirs(path.parent, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(normalize_doc(documents), f, indent=2, ensure_ascii=False)
            f.write('\n')
    except OSError as e:
        raise MigrationError(f'Failed to write export file {path}: {e}') from e
    return path
