"""MongoDB index management for the users collection."""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)

# IndexOptionsConflict, IndexKeySpecsConflict
INDEX_CONFLICT_CODES = (85, 86)


def create_index_safe(collection, keys: list, name: str, unique: bool = False) -> bool:
    """Create an index, replacing existing indexes that conflict with it.

    Creating an index that already exists with the same spec is a no-op
    on the server, so conflicts are only resolved when creation fails:
    - Same name but different key spec or uniqueness
    - Same key spec but different name
    """
    try:
        collection.create_index(keys, name=name, unique=unique)
        return True
    except PyMongoError as e:
        conflict = (
            getattr(e, 'code', None) in INDEX_CONFLICT_CODES
            or "already exists" in str(e)
            or "Conflict" in str(e)
        )
        if not conflict:
            raise
        return _resolve_conflict(collection, keys, name, unique)


def _resolve_conflict(collection, keys: list, name: str, unique: bool) -> bool:
    """Drop every conflicting index, then create the wanted one."""
    keys_dict = dict(keys)
    dropped = False

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys_dict
        if same_name or same_keys:
            logger.warning("Dropping conflicting index", extra={"index": idx_name, "wanted": name})
            collection.drop_index(idx_name)
            dropped = True

    if not dropped:
        logger.error("Failed to resolve index conflict", extra={"index": name})
        return False

    collection.create_index(keys, name=name, unique=unique)
    logger.info("Recreated index", extra={"index": name, "unique": unique})
    return True
