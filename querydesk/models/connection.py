"""Connection-related data models."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ConnectionConfig(BaseModel):
    """Connection configuration model.

    Built once by the caller from user input and handed to the connection
    factory; it is never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    conn_id: int = 0
    name: str = ""
    url: str
    username: str = ""
    password: str = Field(default="", repr=False)
    driver: str = "postgresql"

    def is_usable(self) -> bool:
        """Check that the URL and username are present.

        Returns:
            True if both are non-empty.
        """
        return bool(self.url.strip()) and bool(self.username.strip())

    @property
    def display_name(self) -> str:
        return self.name or f"{self.driver} #{self.conn_id}"


class ConnectionStatus(BaseModel):
    """Connection status model."""

    conn_id: int
    name: str
    driver: str
    connected: bool
    connected_at: Optional[datetime] = None
    latency_ms: Optional[float] = None
    error: Optional[str] = None
