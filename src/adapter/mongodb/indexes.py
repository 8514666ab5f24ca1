"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each MongoXxxRepository.
The unique email index is what makes concurrent duplicate registrations safe,
so a failure to create it aborts startup.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create index, replacing a conflicting one.

    A conflict is an existing index with the same name but other keys, or the
    same keys under another name. Either way it is dropped and recreated.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _resolve_conflict(collection, keys, name, **kwargs)


def _resolve_conflict(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    keys_dict = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys_dict

        if same_name != same_keys or (same_name and idx_info.get('unique', False) != kwargs.get('unique', False)):
            logger.warning(f"Dropping conflicting index: {idx_name}")
            collection.drop_index(idx_name)
            collection.create_index(keys, name=name, **kwargs)
            logger.info(f"Recreated index: {name}")
            return True

    logger.error(f"Failed to resolve index conflict for {name}")
    return False


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for all collections. Called at app startup.

    Returns False if a secondary index failed.

    Raises:
        RuntimeError: the unique email index on users could not be built
    """
    from adapter.mongodb.task_repository import MongoTaskRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    if not MongoUserRepository(db).ensure_indexes():
        raise RuntimeError("Unique email index on users could not be created; refusing to start")

    return MongoTaskRepository(db).ensure_indexes()
