"""Database connection services."""

import asyncio
import logging
import time
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from querydesk.models.connection import ConnectionConfig, ConnectionStatus
from querydesk.services.drivers import DriverAdapter, Rows, get_driver
from querydesk.utils.exceptions import ConnectionFailedError, ValidationError

logger = logging.getLogger("querydesk.database")

DEFAULT_PROBE_TIMEOUT = 5.0
DEFAULT_CONNECT_TIMEOUT = 10.0


class Connection:
    """A live database handle together with the config that opened it.

    ``active`` reflects the handle: it turns False once the handle closes,
    whether through ``close`` or from underneath the wrapper.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        handle: Any,
        driver: DriverAdapter,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    ):
        self.config = config
        self.handle = handle
        self.driver = driver
        self.probe_timeout = probe_timeout
        self.connected_at = datetime.now()

    @property
    def conn_id(self) -> int:
        return self.config.conn_id

    @property
    def active(self) -> bool:
        return not self.is_closed()

    def is_closed(self) -> bool:
        return self.handle is None or self.driver.is_closed(self.handle)

    async def check(self) -> Tuple[bool, Optional[float], Optional[str]]:
        """Probe the server with a bounded round trip.

        Returns:
            A tuple of (is_connected, latency_ms, error_message).
        """
        if self.is_closed():
            return False, None, "Connection is closed"

        try:
            start_time = time.perf_counter()
            await asyncio.wait_for(
                self.driver.ping(self.handle),
                timeout=self.probe_timeout
            )
            latency_ms = (time.perf_counter() - start_time) * 1000
            return True, latency_ms, None
        except asyncio.TimeoutError:
            logger.warning(
                "Liveness probe timed out after %.1fs for %s",
                self.probe_timeout, self.config.display_name
            )
            return False, None, "Liveness probe timed out"
        except Exception as e:
            logger.warning("Liveness probe failed for %s: %s", self.config.display_name, e)
            return False, None, str(e)

    async def is_valid(self) -> bool:
        """Check that the handle is open and answers the liveness probe."""
        is_connected, _, _ = await self.check()
        return is_connected

    async def status(self) -> ConnectionStatus:
        """Build a status snapshot including a fresh probe."""
        is_connected, latency_ms, error = await self.check()
        return ConnectionStatus(
            conn_id=self.conn_id,
            name=self.config.display_name,
            driver=self.driver.driver_id,
            connected=is_connected,
            connected_at=self.connected_at,
            latency_ms=latency_ms,
            error=error
        )

    async def fetch(self, sql: str, params: Sequence[Any] = ()) -> Tuple[List[str], Rows]:
        return await self.driver.fetch(self.handle, sql, params)

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        return await self.driver.execute(self.handle, sql, params)

    async def close(self) -> None:
        """Close the handle if it is still open."""
        if self.is_closed():
            return

        await self.driver.close(self.handle)
        logger.info("Closed connection: %s", self.config.display_name)


async def open_connection(
    config: ConnectionConfig,
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
) -> Connection:
    """Open a connection for the given configuration.

    Args:
        config: Connection configuration.
        probe_timeout: Bound in seconds for liveness probes.
        connect_timeout: Bound in seconds for the handshake.

    Returns:
        An active Connection.

    Raises:
        ValidationError: If the URL or username is empty.
        DriverNotFoundError: If the driver identifier cannot be resolved.
        ConnectionFailedError: If the handshake is rejected.
    """
    if not config.is_usable():
        raise ValidationError(
            "Connection URL and username are required",
            details={"conn_id": config.conn_id}
        )

    driver = get_driver(config.driver)

    try:
        handle = await driver.connect(config, timeout=connect_timeout)
    except Exception as e:
        logger.error("Connection to %s failed: %s", config.display_name, e)
        raise ConnectionFailedError(e) from e

    logger.info("Connected to %s via %s", config.display_name, driver.display_name)
    return Connection(config, handle, driver, probe_timeout=probe_timeout)


async def open_postgres(
    host: str,
    port: int,
    database: str,
    username: str,
    password: str,
    conn_id: int = 0
) -> Connection:
    """Open a PostgreSQL connection from its parts."""
    config = ConnectionConfig(
        conn_id=conn_id,
        name="PostgreSQL Connection",
        url=f"postgresql://{host}:{port}/{database}",
        username=username,
        password=password,
        driver="postgresql"
    )
    return await open_connection(config)


async def open_sqlite(
    path: str,
    conn_id: int = 0,
    username: str = "sqlite"
) -> Connection:
    """Open a SQLite connection for a file path or ``:memory:``."""
    config = ConnectionConfig(
        conn_id=conn_id,
        name="SQLite Connection",
        url=f"sqlite:///{path}",
        username=username,
        driver="sqlite"
    )
    return await open_connection(config)
