"""MongoDB connection management."""

import asyncio
import os
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from hr_agent.core.config import Settings
from hr_agent.core.errors import ConfigurationError
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)


class MongoConnection:
    """Owns a single MongoDB client and its lifecycle (connect, ping, close)."""

    def __init__(
        self,
        host: str,
        port: int,
        query_string: str,
        db_name: str,
        cert_path: str,
        user: str,
        password: str,
    ):
        """Build the connection URI.

        Args:
            host: Database host
            port: Database port
            query_string: Extra URI options (e.g. "tls=true&replicaSet=rs0")
            db_name: Database name
            cert_path: Path to the CA bundle used for TLS
            user: Database user
            password: Database password

        Raises:
            ConfigurationError: If the certificate file does not exist
        """
        if not os.path.exists(cert_path):
            raise ConfigurationError(f"Certificate file not found: {cert_path}")

        self.db_name = db_name
        options = "&".join(part for part in (query_string.lstrip("?"), f"tlsCAFile={cert_path}") if part)
        self.url = f"mongodb://{quote_plus(user)}:{quote_plus(password)}@{host}:{port}/?{options}"
        self._client: MongoClient | None = None
        self._db: Database | None = None

        logger.info(f"MongoDB connection configured for {host}:{port}/{db_name}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnection":
        """Create a connection from application settings."""
        return cls(
            host=settings.db_host,
            port=settings.db_port,
            query_string=settings.db_query_string,
            db_name=settings.db_name,
            cert_path=settings.db_cert,
            user=settings.db_user_name,
            password=settings.db_pwd,
        )

    async def connect(self) -> Database:
        """Open the client and select the database."""
        self._client = await asyncio.to_thread(MongoClient, self.url)
        self._db = self._client[self.db_name]
        return self._db

    async def ping(self) -> None:
        """Round-trip to the server.

        Raises:
            ConfigurationError: If not connected or the server cannot be reached
        """
        if self._db is None:
            raise ConfigurationError("MongoDB connection has not been opened")
        try:
            await asyncio.to_thread(self._db.command, "ping")
        except PyMongoError as e:
            raise ConfigurationError(f"Unable to reach MongoDB: {e}") from e
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")

    def get_client(self) -> MongoClient | None:
        return self._client

    def get_collection(self, name: str) -> Collection:
        """Return a collection from the connected database."""
        if self._db is None:
            raise ConfigurationError("MongoDB connection has not been opened")
        return self._db[name]

    async def close(self) -> None:
        """Close the client if it was opened."""
        if self._client is not None:
            await asyncio.to_thread(self._client.close)
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")
