"""Database driver adapters and the driver registry."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple, Type

import aiosqlite
import asyncpg

from querydesk.models.connection import ConnectionConfig
from querydesk.utils.exceptions import DriverNotFoundError, ExecutionError

logger = logging.getLogger("querydesk.drivers")

Rows = List[List[Any]]


class DriverAdapter(ABC):
    """Base class for driver adapters.

    An adapter turns a ConnectionConfig into a live handle and runs
    statements on it. Driver errors raised while running a statement are
    re-raised as ExecutionError carrying the driver's message.
    """

    driver_id = "base"
    aliases: Tuple[str, ...] = ()
    display_name = "Base"
    required_module = None  # Module name to import for this adapter
    install_hint = None  # pip install hint for missing dependency

    @classmethod
    def is_available(cls) -> bool:
        """Check if the required module for this adapter is installed."""
        if cls.required_module is None:
            return True
        try:
            __import__(cls.required_module)
            return True
        except ImportError:
            return False

    @abstractmethod
    async def connect(self, config: ConnectionConfig, timeout: float) -> Any:
        """Perform the handshake and return the live handle."""

    @abstractmethod
    def is_closed(self, handle: Any) -> bool:
        """Check whether the handle has been closed."""

    @abstractmethod
    async def ping(self, handle: Any) -> None:
        """Run a trivial round trip; raise if the server does not answer."""

    @abstractmethod
    async def fetch(
        self,
        handle: Any,
        sql: str,
        params: Sequence[Any] = ()
    ) -> Tuple[List[str], Rows]:
        """Run a row-returning statement.

        Returns:
            A tuple of (column_names, rows), both in result order.
        """

    @abstractmethod
    async def execute(
        self,
        handle: Any,
        sql: str,
        params: Sequence[Any] = ()
    ) -> int:
        """Run a mutation and return the number of affected rows."""

    @abstractmethod
    async def close(self, handle: Any) -> None:
        """Close the handle."""


class PostgresAdapter(DriverAdapter):
    """Adapter for PostgreSQL via asyncpg.

    Bind parameters use the ``$1 .. $n`` placeholder style.
    """

    driver_id = "postgresql"
    aliases = ("postgres", "asyncpg")
    display_name = "PostgreSQL"
    required_module = "asyncpg"
    install_hint = "pip install asyncpg"

    async def connect(self, config: ConnectionConfig, timeout: float) -> Any:
        dsn = config.url
        if dsn.startswith("jdbc:"):
            dsn = dsn[len("jdbc:"):]
        return await asyncpg.connect(
            dsn=dsn,
            user=config.username,
            password=config.password or None,
            timeout=timeout
        )

    def is_closed(self, handle: Any) -> bool:
        return handle.is_closed()

    async def ping(self, handle: Any) -> None:
        await handle.fetchval("SELECT 1")

    async def fetch(
        self,
        handle: Any,
        sql: str,
        params: Sequence[Any] = ()
    ) -> Tuple[List[str], Rows]:
        try:
            stmt = await handle.prepare(sql)
            columns = [attr.name for attr in stmt.get_attributes()]
            records = await stmt.fetch(*params)
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            raise ExecutionError(str(e)) from e

        return columns, [list(record) for record in records]

    async def execute(
        self,
        handle: Any,
        sql: str,
        params: Sequence[Any] = ()
    ) -> int:
        try:
            status = await handle.execute(sql, *params)
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            raise ExecutionError(str(e)) from e

        return affected_rows_from_status(status)

    async def close(self, handle: Any) -> None:
        await handle.close()


class SQLiteAdapter(DriverAdapter):
    """Adapter for SQLite via aiosqlite.

    Accepts ``sqlite:///path``, ``sqlite:///:memory:`` or a bare file path.
    Each mutation is committed straight away. Bind parameters use ``?``.
    """

    driver_id = "sqlite"
    aliases = ("sqlite3", "aiosqlite")
    display_name = "SQLite"
    required_module = "aiosqlite"
    install_hint = "pip install aiosqlite"

    async def connect(self, config: ConnectionConfig, timeout: float) -> Any:
        return await aiosqlite.connect(sqlite_path(config.url), timeout=timeout)

    def is_closed(self, handle: Any) -> bool:
        # aiosqlite drops its sqlite3 connection once closed
        return handle._connection is None

    async def ping(self, handle: Any) -> None:
        async with handle.execute("SELECT 1") as cursor:
            await cursor.fetchone()

    async def fetch(
        self,
        handle: Any,
        sql: str,
        params: Sequence[Any] = ()
    ) -> Tuple[List[str], Rows]:
        try:
            async with handle.execute(sql, tuple(params)) as cursor:
                columns = [desc[0] for desc in cursor.description or ()]
                records = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise ExecutionError(str(e)) from e

        return columns, [list(record) for record in records]

    async def execute(
        self,
        handle: Any,
        sql: str,
        params: Sequence[Any] = ()
    ) -> int:
        try:
            async with handle.execute(sql, tuple(params)) as cursor:
                # RETURNING rows must be drained before rowcount is final
                await cursor.fetchall()
                affected = cursor.rowcount
            await handle.commit()
        except aiosqlite.Error as e:
            await self._rollback(handle)
            raise ExecutionError(str(e)) from e

        # DDL statements report -1
        return max(affected, 0)

    async def _rollback(self, handle: Any) -> None:
        try:
            await handle.rollback()
        except aiosqlite.Error as e:
            logger.warning("Rollback after failed statement also failed: %s", e)

    async def close(self, handle: Any) -> None:
        await handle.close()


def affected_rows_from_status(status: str) -> int:
    """Read the affected-row count from a PostgreSQL command tag.

    Args:
        status: Command tag such as ``UPDATE 3`` or ``INSERT 0 1``.

    Returns:
        The trailing count, or 0 for tags without one (``CREATE TABLE``).
    """
    parts = (status or "").split()
    if parts and parts[-1].isdigit():
        return int(parts[-1])
    return 0


def sqlite_path(url: str) -> str:
    """Turn a sqlite URL into the path aiosqlite expects."""
    if url.startswith("sqlite:///"):
        return url[len("sqlite:///"):]
    if url.startswith("sqlite://"):
        return url[len("sqlite://"):]
    return url


_DRIVERS: Dict[str, Type[DriverAdapter]] = {}


def register_driver(adapter_cls: Type[DriverAdapter]) -> Type[DriverAdapter]:
    """Register an adapter under its id and aliases.

    Args:
        adapter_cls: The adapter class to register.

    Returns:
        The same class, so this can be used as a decorator.
    """
    for name in (adapter_cls.driver_id, *adapter_cls.aliases):
        _DRIVERS[name.lower()] = adapter_cls
    logger.debug("Registered driver: %s", adapter_cls.driver_id)
    return adapter_cls


def get_driver(driver_id: str) -> DriverAdapter:
    """Resolve a driver identifier to an adapter instance.

    Args:
        driver_id: Driver identifier from the connection config.

    Returns:
        A fresh adapter instance.

    Raises:
        DriverNotFoundError: If nothing is registered under the id or the
            adapter's driver library is not installed.
    """
    adapter_cls = _DRIVERS.get((driver_id or "").strip().lower())
    if adapter_cls is None:
        raise DriverNotFoundError(driver_id)
    if not adapter_cls.is_available():
        raise DriverNotFoundError(driver_id, adapter_cls.install_hint)
    return adapter_cls()


def available_drivers() -> List[str]:
    """Get the ids of registered drivers whose library is installed."""
    return sorted({
        cls.driver_id for cls in _DRIVERS.values() if cls.is_available()
    })


register_driver(PostgresAdapter)
register_driver(SQLiteAdapter)
