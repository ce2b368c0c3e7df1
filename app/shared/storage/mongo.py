"""
MongoDB client manager keyed by connection label.

Labels come from `MONGO_URL_<LABEL>` configuration keys; `default` falls back
to MONGO_URL_DEFAULT, then MONGO_URL, then localhost.
"""

import atexit
import threading

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient

from ..config import config


def hide_password(connection_string: str) -> str:
    """Mask the password part of a connection string for logging."""
    if "://" not in connection_string:
        return connection_string

    scheme, rest = connection_string.split("://", 1)
    at = rest.rfind("@")
    if at == -1:
        return connection_string

    auth, host = rest[:at], rest[at + 1 :]
    if ":" not in auth:
        return connection_string

    username, password = auth.split(":", 1)
    if not username or not password:
        return connection_string
    return f"{scheme}://{username}:***@{host}"


class MongoManager:
    """Process-wide registry of motor clients, one per label."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, "_initialized"):
            return

        self._clients: dict[str, AsyncIOMotorClient] = {}
        self._connection_strings: dict[str, str] = {}
        self._client_lock = threading.Lock()

        self._max_pool_size = config.get_mongo_max_pool_size()
        self._server_selection_timeout = config.get_mongo_server_selection_timeout()
        self._connect_timeout = config.get_mongo_connect_timeout()
        self._socket_timeout = config.get_mongo_socket_timeout()

        self._load_connection_strings()
        atexit.register(self.close_all)

        self._initialized = True

    def _load_connection_strings(self):
        for key, value in config.items():
            if not key.startswith("MONGO_URL_") or not value:
                continue
            label = key[len("MONGO_URL_") :].lower()
            self._connection_strings[label] = value
            logger.info("Loaded MongoDB connection string for label '{}': {}", label, hide_password(value))

        if "default" not in self._connection_strings:
            self._connection_strings["default"] = config.get_mongo_url("default")

        logger.info(
            "MongoDB labels: {} pool={} server_selection={}ms connect={}ms socket={}ms",
            sorted(self._connection_strings),
            self._max_pool_size,
            self._server_selection_timeout,
            self._connect_timeout,
            self._socket_timeout,
        )

    def get_client(self, label: str | None = None) -> AsyncIOMotorClient:
        """
        Get (or lazily open) the client for `label`.

        Raises:
            ValueError: If no connection string is configured for the label
        """
        label = label or "default"

        with self._client_lock:
            if label not in self._clients:
                if label not in self._connection_strings:
                    raise ValueError(f"No MongoDB connection string found for label '{label}'")

                logger.info("Open MongoDB client for label '{}'", label)
                self._clients[label] = AsyncIOMotorClient(
                    self._connection_strings[label],
                    serverSelectionTimeoutMS=self._server_selection_timeout,
                    connectTimeoutMS=self._connect_timeout,
                    socketTimeoutMS=self._socket_timeout,
                    maxPoolSize=self._max_pool_size,
                    tz_aware=True,
                )

            return self._clients[label]

    def close_client(self, label: str):
        with self._client_lock:
            client = self._clients.pop(label, None)
        if client is not None:
            client.close()
            logger.info("Closed MongoDB client for label '{}'", label)

    def close_all(self):
        for label in list(self._clients):
            self.close_client(label)


_manager: MongoManager | None = None


def get_mongo_manager() -> MongoManager:
    global _manager
    if _manager is None:
        _manager = MongoManager()
    return _manager


def get_mongo_client(label: str | None = None) -> AsyncIOMotorClient:
    return get_mongo_manager().get_client(label)
