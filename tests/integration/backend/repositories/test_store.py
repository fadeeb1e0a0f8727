"""
Integration Tests for the Record Store.

Runs the table-scoped primitives against a real (in-memory) database.
"""

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import StoreError, ValidationError
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.store import FieldType, RecordStore, coerce_value, validate_id

FIELD_TYPES = {
    "user_id": FieldType.INTEGER,
    "created_at": FieldType.DATETIME,
    "updated_at": FieldType.DATETIME,
}
STAMP = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def store(db_session: AsyncSession) -> RecordStore:
    return RecordStore(db_session, Note.__table__, FIELD_TYPES)


def _row(**overrides):
    values = {
        "user_id": 7,
        "title": "Row",
        "content": "",
        "status": "draft",
        "created_at": STAMP,
        "updated_at": STAMP,
    }
    values.update(overrides)
    return values


class TestValidateId:
    """Tests for id validation."""

    @pytest.mark.parametrize("value", [0, -1, True, "3", 1.5, None])
    def test_rejects_non_positive_or_non_int(self, value):
        with pytest.raises(ValidationError):
            validate_id(value)

    def test_accepts_positive_int(self):
        assert validate_id(42) == 42


class TestCoerceValue:
    """Tests for storage type coercion."""

    def test_integer(self):
        assert coerce_value("12", FieldType.INTEGER) == 12

    def test_text(self):
        assert coerce_value(12, FieldType.TEXT) == "12"

    def test_datetime_from_string(self):
        assert coerce_value("2026-03-01T12:00:00", FieldType.DATETIME) == STAMP

    def test_none_passes_through(self):
        assert coerce_value(None, FieldType.INTEGER) is None


class TestInsertAndRead:
    """Tests for insert and read_by_id."""

    @pytest.mark.asyncio
    async def test_insert_returns_new_id(self, store: RecordStore):
        first = await store.insert(_row(title="One"))
        second = await store.insert(_row(title="Two"))

        assert first > 0
        assert second > first

    @pytest.mark.asyncio
    async def test_insert_coerces_declared_types(self, store: RecordStore):
        new_id = await store.insert(_row(user_id="9"))

        row = await store.read_by_id(new_id)
        assert row["user_id"] == 9

    @pytest.mark.asyncio
    async def test_read_missing_returns_none(self, store: RecordStore):
        assert await store.read_by_id(9999) is None

    @pytest.mark.asyncio
    async def test_read_rejects_invalid_id(self, store: RecordStore):
        with pytest.raises(ValidationError):
            await store.read_by_id(0)

    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_error(self, store: RecordStore):
        # status violates the CHECK constraint
        with pytest.raises(StoreError):
            await store.insert(_row(status="bogus"))


class TestUpdate:
    """Tests for update_by_id."""

    @pytest.mark.asyncio
    async def test_update_changes_row(self, store: RecordStore):
        new_id = await store.insert(_row())

        rows = await store.update_by_id(new_id, {"title": "Changed"})

        assert rows == 1
        assert (await store.read_by_id(new_id))["title"] == "Changed"

    @pytest.mark.asyncio
    async def test_identical_values_count_as_no_change(self, store: RecordStore):
        new_id = await store.insert(_row())
        later = datetime(2026, 3, 2, 0, 0, 0)

        rows = await store.update_by_id(new_id, {"title": "Row"}, stamp={"updated_at": later})

        assert rows == 0
        assert (await store.read_by_id(new_id))["updated_at"] == STAMP

    @pytest.mark.asyncio
    async def test_stamp_written_with_real_change(self, store: RecordStore):
        new_id = await store.insert(_row())
        later = datetime(2026, 3, 2, 0, 0, 0)

        await store.update_by_id(new_id, {"status": "active"}, stamp={"updated_at": later})

        row = await store.read_by_id(new_id)
        assert row["status"] == "active"
        assert row["updated_at"] == later

    @pytest.mark.asyncio
    async def test_update_missing_returns_zero(self, store: RecordStore):
        assert await store.update_by_id(9999, {"title": "x"}) == 0

    @pytest.mark.asyncio
    async def test_empty_fields_return_zero(self, store: RecordStore):
        new_id = await store.insert(_row())
        assert await store.update_by_id(new_id, {}) == 0

    @pytest.mark.asyncio
    async def test_update_rejects_invalid_id(self, store: RecordStore):
        with pytest.raises(ValidationError):
            await store.update_by_id(-1, {"title": "x"})


class TestDelete:
    """Tests for delete_by_id."""

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, store: RecordStore):
        new_id = await store.insert(_row())

        assert await store.delete_by_id(new_id) == 1
        assert await store.read_by_id(new_id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_zero(self, store: RecordStore):
        assert await store.delete_by_id(9999) == 0

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, store: RecordStore):
        first = await store.insert(_row())
        await store.delete_by_id(first)

        second = await store.insert(_row())

        assert second > first


class TestSelectAndCount:
    """Tests for select_where and count_where."""

    @pytest.mark.asyncio
    async def test_filter_order_and_limit(self, store: RecordStore):
        for title in ["b", "a", "c"]:
            await store.insert(_row(title=title))
        column = Note.__table__.c

        rows = await store.select_where(
            column.title != "c",
            order_by=[column.title.asc()],
            limit=1,
        )

        assert [row["title"] for row in rows] == ["a"]
        assert await store.count_where(column.title != "c") == 2
        assert await store.count_where() == 3
