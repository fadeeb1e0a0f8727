"""
Base Repository.

Base class for repositories that pair a RecordStore with the validation
rules of one record kind.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.core.utils import utc_now
from notekeeper.backend.repositories.rules import FieldRule, sanitize_fields
from notekeeper.backend.repositories.store import FieldType, RecordStore

logger = get_logger(__name__)

RecordType = TypeVar("RecordType", bound=BaseModel)


class BaseRepository(Generic[RecordType]):
    """
    Base repository with validated CRUD operations.

    Subclasses declare the table, the record schema, the field rules and
    the storage type of each non-text field:

        class NoteRepository(BaseRepository[NoteRecord]):
            table = Note.__table__
            record_schema = NoteRecord
            rules = NOTE_RULES
            field_types = {"user_id": FieldType.INTEGER}

    Absence is never an error here: reads return None and writes report
    whether a row was affected. Callers decide what absence means.
    """

    table: ClassVar[Table]
    record_schema: ClassVar[type[BaseModel]]
    rules: ClassVar[Mapping[str, FieldRule]]
    field_types: ClassVar[Mapping[str, FieldType]] = {
        "created_at": FieldType.DATETIME,
        "updated_at": FieldType.DATETIME,
    }

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.store = RecordStore(session, self.table, self.field_types)

    def sanitize(self, raw: Mapping[str, Any], partial: bool = True) -> dict[str, Any]:
        """Validate raw input against this record kind's rules."""
        return sanitize_fields(raw, self.rules, partial=partial)

    def _to_record(self, row: Mapping[str, Any]) -> RecordType:
        return self.record_schema.model_validate(dict(row))

    async def create(self, raw: Mapping[str, Any]) -> int:
        """
        Validate and insert a new record.

        Returns:
            The new record id

        Raises:
            ValidationError: If a field fails its rule
            StoreError: If the insert fails
        """
        fields = self.sanitize(raw, partial=False)
        now = utc_now()
        fields["created_at"] = now
        fields["updated_at"] = now

        new_id = await self.store.insert(fields)
        logger.debug("Record created", extra={"table": self.store.table_name, "id": new_id})
        return new_id

    async def get(self, id: int) -> RecordType | None:
        """
        Get a record by id.

        Raises:
            ValidationError: If id is not a positive integer
        """
        row = await self.store.read_by_id(id)
        return self._to_record(row) if row is not None else None

    async def update(self, id: int, raw: Mapping[str, Any]) -> bool:
        """
        Validate and write the fields present in raw.

        Missing fields are left untouched; no merge with the stored record
        happens here.

        Returns:
            True if a row changed

        Raises:
            ValidationError: If id or a present field is invalid
            StoreError: If the update fails
        """
        fields = self.sanitize(raw, partial=True)
        rows = await self.store.update_by_id(id, fields, stamp={"updated_at": utc_now()})
        return rows > 0

    async def delete(self, id: int) -> bool:
        """
        Hard delete a record.

        Returns:
            True if a row was removed
        """
        rows = await self.store.delete_by_id(id)
        return rows > 0

    async def soft_delete(self, id: int) -> bool:
        """
        Archive a record in place and bump its updated_at.

        updated_at is written as a regular field, so an already archived
        record still counts as changed.

        Returns:
            True if the record exists
        """
        fields = self.sanitize({"status": "archived"}, partial=True)
        fields["updated_at"] = utc_now()
        rows = await self.store.update_by_id(id, fields)
        return rows > 0
