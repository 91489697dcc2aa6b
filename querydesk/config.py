"""Configuration management for querydesk."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, ValidationError
from typing import List, Optional
import json
import logging

from querydesk.models.connection import ConnectionConfig

logger = logging.getLogger("querydesk.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="QUERYDESK_")

    # Default connection, opened at startup when a URL is given
    default_url: str = ""
    default_username: str = ""
    default_password: str = Field(default="", repr=False)
    default_driver: str = "postgresql"
    default_name: str = "default"

    # Saved connections (JSON array of connection configs)
    connections: str = Field(
        default="[]",
        description="JSON array of saved connection configurations"
    )

    # Connection configuration
    probe_timeout: float = 5.0
    connect_timeout: float = 10.0

    # Query configuration
    min_query_length: int = 3
    history_limit: int = 100

    # Logging configuration
    log_level: str = "INFO"

    # MCP configuration
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8989
    mcp_transport: str = "stdio"

    def get_default_connection(self) -> Optional[ConnectionConfig]:
        """Build the default connection config, if one is configured.

        Returns:
            The config with id 1, or None when no URL is set.
        """
        if not self.default_url:
            return None
        return ConnectionConfig(
            conn_id=1,
            name=self.default_name,
            url=self.default_url,
            username=self.default_username,
            password=self.default_password,
            driver=self.default_driver
        )

    def get_connections(self) -> List[ConnectionConfig]:
        """Parse saved connections from JSON.

        Returns:
            List of connection configs; entries that do not validate are skipped.
        """
        try:
            raw = json.loads(self.connections)
        except json.JSONDecodeError:
            return []

        if not isinstance(raw, list):
            return []

        configs = []
        for item in raw:
            try:
                configs.append(ConnectionConfig.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping invalid saved connection: %s", e)
        return configs

    def get_saved_connection(self, conn_id: int) -> Optional[ConnectionConfig]:
        for config in self.get_connections():
            if config.conn_id == conn_id:
                return config
        return None
