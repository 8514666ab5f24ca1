import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

USERS_COLLECTION_NAME = 'users'
TASKS_COLLECTION_NAME = 'tasks'


class MongoConnection:
    """Explicit MongoDB handle with an open/close lifecycle.

    Built once at app startup (or by a script), passed to whoever needs the
    database, and closed on shutdown.
    """

    def __init__(self, url: str | None, database_name: str):
        self.url = url
        self.database_name = database_name
        self._client: MongoClient | None = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def database(self) -> Database:
        if self._client is None:
            raise RuntimeError("MongoDB connection is not open")
        return self._client[self.database_name]

    def open(self) -> bool:
        """Connect and verify with a ping.

        Returns:
            True if connected, False if MONGO_URL is missing or the server is unreachable
        """
        if self._client is not None:
            return True

        if not self.url:
            logger.error("[MONGODB] MONGO_URL not configured.")
            return False

        try:
            client = MongoClient(
                self.url,
                serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
                connectTimeoutMS=5000,
                socketTimeoutMS=30000,  # 30s timeout for operations
                maxPoolSize=10,
                minPoolSize=0,
                maxIdleTimeMS=30000,
                waitQueueTimeoutMS=10000,
                retryWrites=True,
                retryReads=True,
                tz_aware=True,
            )
            client.admin.command('ping')
        except (ConnectionFailure, PyMongoError) as e:
            logger.error(f"[MONGODB] Connection failed: {str(e)[:200]}")
            return False

        self._client = client
        logger.info(f"[MONGODB] Connected successfully to {self.database_name}")
        return True

    def ping(self) -> bool:
        if self._client is None:
            return False
        try:
            self._client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("[MONGODB] Connection closed")
