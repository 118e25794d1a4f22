"""API configuration for local development."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

load_dotenv()

_GRAPH_SCHEMES = ("bolt://", "bolt+s://", "bolt+ssc://", "neo4j://", "neo4j+s://", "neo4j+ssc://")


class LocalConfig:
    """Local development configuration.

    Manages environment-based configuration for:
    - the relational store (DuckDB file)
    - the graph store (Bolt URL and credentials)
    - the HTTP server
    - the transaction simulator
    """

    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # Relational store
    DATABASE_PATH = os.getenv("DATABASE_PATH", "data/txnet.duckdb")

    # Graph store (Memgraph runs without auth by default)
    GRAPH_URL = os.getenv("GRAPH_URL", os.getenv("MEMGRAPH_URL", "bolt://localhost:7687"))
    GRAPH_USERNAME = os.getenv("GRAPH_USERNAME", "")
    GRAPH_PASSWORD = os.getenv("GRAPH_PASSWORD", "")
    GRAPH_DATABASE = os.getenv("GRAPH_DATABASE") or None

    # HTTP server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3001"))
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Wipe both stores and reseed on every start
    SYNC_ON_STARTUP = os.getenv("SYNC_ON_STARTUP", "true").lower() == "true"

    # Transaction simulator
    SIMULATOR_HOST = os.getenv("SIMULATOR_HOST", "http://localhost:3001")

    @staticmethod
    def mask_sensitive(value: str, visible_chars: int = 4) -> str:
        """Mask sensitive configuration values for logging.

        Args:
            value: The sensitive value to mask
            visible_chars: Number of characters to show at the end

        Returns:
            Masked string like "***xyz" or "***" if value is too short
        """
        if not value or len(value) <= visible_chars:
            return "***"
        return "***" + value[-visible_chars:]

    def validate(self) -> None:
        """Check values that would only fail later, at first use.

        Raises:
            ConfigurationError: On an unusable graph URL or port.
        """
        if not self.GRAPH_URL.startswith(_GRAPH_SCHEMES):
            raise ConfigurationError(
                f"GRAPH_URL must use one of {', '.join(_GRAPH_SCHEMES)}: {self.GRAPH_URL}"
            )
        if not 0 < self.PORT < 65536:
            raise ConfigurationError(f"PORT out of range: {self.PORT}")
        if not self.DATABASE_PATH:
            raise ConfigurationError("DATABASE_PATH must not be empty")

    def log_summary(self) -> None:
        """Log the effective configuration with secrets masked."""
        logger.info(f"Environment: {self.ENVIRONMENT}")
        logger.info(f"Relational store: {self.DATABASE_PATH}")
        logger.info(
            f"Graph store: {self.GRAPH_URL} "
            f"(user={self.GRAPH_USERNAME or '-'}, "
            f"password={self.mask_sensitive(self.GRAPH_PASSWORD) if self.GRAPH_PASSWORD else '-'})"
        )
        logger.info(f"HTTP: {self.HOST}:{self.PORT}, sync on startup: {self.SYNC_ON_STARTUP}")


config = LocalConfig()
