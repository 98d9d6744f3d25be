from datetime import datetime

from bson import ObjectId


def normalize_doc(obj):
    """Recursively convert BSON types (ObjectId) and datetimes to JSON-serializable values.

    - ObjectId -> str(ObjectId)
    - datetime -> ISO string
    - recursively handles dicts and lists
    Returns a new object (does not mutate input).
    """
    if obj is None:
        return None
    if isinstance(obj, dict):
        return {k: normalize_doc(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [normalize_doc(v) for v in obj]
    if isinstance(obj, ObjectId):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    return obj
