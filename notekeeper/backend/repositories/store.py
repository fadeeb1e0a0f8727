"""
Record Store.

Generic persistence primitives scoped to one table: insert, read, update
and delete by integer id, plus query-by-filter helpers. The store knows
nothing about the records it holds; repositories layer validation and
query semantics on top.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import ColumnElement, Table, delete, func, insert, or_, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import StoreError, ValidationError
from notekeeper.backend.core.logging import get_logger

logger = get_logger(__name__)


class FieldType(StrEnum):
    """Storage type of a column value."""

    TEXT = "text"
    INTEGER = "integer"
    DATETIME = "datetime"


def validate_id(id: Any) -> int:
    """
    Validate a primary id.

    Raises:
        ValidationError: If id is not a positive integer
    """
    if isinstance(id, bool) or not isinstance(id, int) or id <= 0:
        raise ValidationError("The ID must be a positive integer.", details={"id": id})
    return id


def coerce_value(value: Any, field_type: FieldType) -> Any:
    """Convert a value to its declared storage type. None passes through."""
    if value is None:
        return None
    if field_type is FieldType.INTEGER:
        return int(value)
    if field_type is FieldType.DATETIME:
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value))
    return str(value)


class RecordStore:
    """
    Table-scoped CRUD primitives over an async session.

    Field storage types come from a static mapping declared once per
    record kind. Fields missing from the mapping are stored as text:

        store = RecordStore(session, Note.__table__, {"user_id": FieldType.INTEGER})
    """

    def __init__(
        self,
        session: AsyncSession,
        table: Table,
        field_types: Mapping[str, FieldType] | None = None,
        id_column: str = "id",
    ) -> None:
        self.session = session
        self.table = table
        self.field_types = dict(field_types or {})
        self.id_column = table.c[id_column]

    @property
    def table_name(self) -> str:
        """Name of the underlying table."""
        return self.table.name

    def coerce(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Apply the per-field storage types to a set of values."""
        return {
            key: coerce_value(value, self.field_types.get(key, FieldType.TEXT))
            for key, value in fields.items()
        }

    async def _execute(self, operation: str, statement: Any) -> Any:
        """
        Execute a statement, converting driver errors to StoreError.

        Raises:
            StoreError: If the database operation fails
        """
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(
                "Store operation failed",
                extra={"table": self.table_name, "operation": operation, "error": str(e)},
            )
            raise StoreError(f"{operation.capitalize()} failed in {self.table_name}.") from e

    async def insert(self, fields: Mapping[str, Any]) -> int:
        """
        Insert a new row.

        Returns:
            The id assigned by the database

        Raises:
            StoreError: If the write fails
        """
        result = await self._execute("insert", insert(self.table).values(**self.coerce(fields)))
        new_id = result.inserted_primary_key[0]
        logger.debug("Row inserted", extra={"table": self.table_name, "id": new_id})
        return int(new_id)

    async def read_by_id(self, id: int) -> dict[str, Any] | None:
        """
        Read a single row by id.

        Returns:
            Column mapping, or None if no row matches

        Raises:
            ValidationError: If id is not a positive integer
        """
        id = validate_id(id)
        result = await self._execute(
            "read",
            select(self.table).where(self.id_column == id).limit(1),
        )
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def update_by_id(
        self,
        id: int,
        fields: Mapping[str, Any],
        stamp: Mapping[str, Any] | None = None,
    ) -> int:
        """
        Update a row by id.

        Only rows where at least one of `fields` differs from the stored
        value are touched. `stamp` values are written alongside a real
        change but never count as one.

        Returns:
            Number of rows changed (0 if not found or nothing differs)

        Raises:
            ValidationError: If id is not a positive integer
            StoreError: If the write fails
        """
        id = validate_id(id)
        values = self.coerce(fields)
        if not values:
            return 0

        changed = or_(*(self.table.c[key].is_distinct_from(value) for key, value in values.items()))
        statement = (
            update(self.table)
            .where(self.id_column == id)
            .where(changed)
            .values({**values, **self.coerce(stamp or {})})
        )
        result = await self._execute("update", statement)
        logger.debug(
            "Row updated",
            extra={"table": self.table_name, "id": id, "rows": result.rowcount},
        )
        return result.rowcount

    async def delete_by_id(self, id: int) -> int:
        """
        Hard delete a row by id.

        Returns:
            Number of rows removed (0 if not found)

        Raises:
            ValidationError: If id is not a positive integer
            StoreError: If the write fails
        """
        id = validate_id(id)
        result = await self._execute("delete", delete(self.table).where(self.id_column == id))
        logger.debug(
            "Row deleted",
            extra={"table": self.table_name, "id": id, "rows": result.rowcount},
        )
        return result.rowcount

    async def select_where(
        self,
        where: ColumnElement[bool] | None = None,
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """Select rows matching a filter expression."""
        statement = select(self.table).where(where if where is not None else true())
        if order_by:
            statement = statement.order_by(*order_by)
        if limit is not None:
            statement = statement.limit(limit)
        if offset:
            statement = statement.offset(offset)

        result = await self._execute("select", statement)
        return [dict(row) for row in result.mappings().all()]

    async def count_where(self, where: ColumnElement[bool] | None = None) -> int:
        """Count rows matching a filter expression."""
        statement = (
            select(func.count())
            .select_from(self.table)
            .where(where if where is not None else true())
        )
        result = await self._execute("count", statement)
        return int(result.scalar_one())
