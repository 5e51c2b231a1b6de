"""
Async database access (raw SQL) using asyncpg, plus the persistence gateway
that resource services talk to.

`Database` owns the connection pool. The application creates one in its
lifespan (see `api/main.py`), wraps it in a `PostgresGateway`, and hands the
gateway to request handlers through `get_gateway`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- identifiers (table/column names) only ever come from `Table` definitions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

import asyncpg
from fastapi import Request

from . import config
from .errors import StoreError

logger = logging.getLogger(__name__)

DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@dataclass(frozen=True)
class Table:
    name: str
    columns: tuple[str, ...]

    def check_columns(self, values: dict[str, Any]) -> list[str]:
        unknown = sorted(set(values) - set(self.columns))
        if unknown:
            raise ValueError(f"Unknown columns for {self.name}: {unknown}")
        return [c for c in self.columns if c in values]


def _plain_number(value: Any) -> Any:
    # NUMERIC columns come back as Decimal; keep JSON output numeric.
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return {key: _plain_number(value) for key, value in record.items()}


def _affected_rows(status_line: str) -> int:
    # asyncpg returns the command tag, e.g. "UPDATE 1" or "DELETE 0".
    tail = (status_line or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = config.DEFAULT_DB_POOL_MIN_SIZE,
        max_size: int = config.DEFAULT_DB_POOL_MAX_SIZE,
        command_timeout: float = config.DEFAULT_DB_COMMAND_TIMEOUT,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_env(cls) -> Database:
        return cls(
            config.database_url(),
            min_size=config.db_pool_min_size(),
            max_size=config.db_pool_max_size(),
            command_timeout=config.db_command_timeout(),
        )

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
            command_timeout=self._command_timeout,
        )
        logger.info("db_pool_ready min_size=%s max_size=%s", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any, operation: str) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool().fetchrow(sql, *args)
        except DRIVER_ERRORS as exc:
            raise StoreError(operation=operation, params=args, details=str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any, operation: str) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool().fetch(sql, *args)
        except DRIVER_ERRORS as exc:
            raise StoreError(operation=operation, params=args, details=str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any, operation: str) -> str:
        """
        Run a statement (UPDATE/DELETE/DDL) and return asyncpg's command tag.
        """
        try:
            return await self.pool().execute(sql, *args)
        except DRIVER_ERRORS as exc:
            raise StoreError(operation=operation, params=args, details=str(exc)) from exc


class PersistenceGateway(Protocol):
    async def list_rows(
        self, table: Table, *, limit: int | None = None, offset: int | None = None
    ) -> list[dict[str, Any]]: ...

    async def search_by_name(self, table: Table, fragment: str) -> list[dict[str, Any]]: ...

    async def get_by_id(self, table: Table, row_id: int) -> dict[str, Any] | None: ...

    async def insert(self, table: Table, values: dict[str, Any]) -> int: ...

    async def update(self, table: Table, row_id: int, values: dict[str, Any]) -> int: ...

    async def delete(self, table: Table, row_id: int) -> int: ...


class PostgresGateway:
    """
    Translates logical table operations into parameterized SQL.

    Reads use the store's native row order (no ORDER BY).
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    async def list_rows(
        self, table: Table, *, limit: int | None = None, offset: int | None = None
    ) -> list[dict[str, Any]]:
        if limit is None and offset is None:
            return await self.database.fetch_all(
                f"SELECT * FROM {table.name}",
                operation=f"{table.name}.list",
            )
        return await self.database.fetch_all(
            f"""
            SELECT *
            FROM {table.name}
            LIMIT $1
            OFFSET $2
            """,
            limit if limit is not None else config.PAGINATION_DEFAULTS["limit"],
            offset if offset is not None else config.PAGINATION_DEFAULTS["offset"],
            operation=f"{table.name}.list",
        )

    async def search_by_name(self, table: Table, fragment: str) -> list[dict[str, Any]]:
        return await self.database.fetch_all(
            f"""
            SELECT *
            FROM {table.name}
            WHERE name LIKE $1
            """,
            f"%{fragment}%",
            operation=f"{table.name}.search",
        )

    async def get_by_id(self, table: Table, row_id: int) -> dict[str, Any] | None:
        return await self.database.fetch_one(
            f"""
            SELECT *
            FROM {table.name}
            WHERE id = $1
            """,
            row_id,
            operation=f"{table.name}.get",
        )

    async def insert(self, table: Table, values: dict[str, Any]) -> int:
        columns = table.check_columns(values)
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        row = await self.database.fetch_one(
            f"""
            INSERT INTO {table.name} ({", ".join(columns)})
            VALUES ({placeholders})
            RETURNING id
            """,
            *(values[c] for c in columns),
            operation=f"{table.name}.insert",
        )
        if row is None:
            raise StoreError(operation=f"{table.name}.insert", params=values, details="No id returned.")
        return int(row["id"])

    async def update(self, table: Table, row_id: int, values: dict[str, Any]) -> int:
        columns = table.check_columns(values)
        assignments = ", ".join(f"{c} = ${i}" for i, c in enumerate(columns, start=1))
        status_line = await self.database.execute(
            f"""
            UPDATE {table.name}
            SET {assignments}
            WHERE id = ${len(columns) + 1}
            """,
            *(values[c] for c in columns),
            row_id,
            operation=f"{table.name}.update",
        )
        return _affected_rows(status_line)

    async def delete(self, table: Table, row_id: int) -> int:
        status_line = await self.database.execute(
            f"""
            DELETE FROM {table.name}
            WHERE id = $1
            """,
            row_id,
            operation=f"{table.name}.delete",
        )
        return _affected_rows(status_line)


def get_gateway(request: Request) -> PersistenceGateway:
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("Persistence gateway is not initialized.")
    return gateway
