"""Tests for the record store contract."""
import pytest
from sqlalchemy.exc import OperationalError

from app.models.record import Collection
from app.services.exceptions import NotFound, StorageError
from app.services.record_store import RecordStore, parse_timestamp, utc_timestamp


def _boom(*args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


class TestAppend:

    def test_assigns_id_and_timestamp(self, db):
        store = RecordStore(db)
        record = store.append(Collection.payments, {"amount": "500.00"})
        assert record["id"].startswith("pay_")
        assert record["amount"] == "500.00"
        assert parse_timestamp(record["timestamp"]) is not None

    def test_failed_write_raises_storage_error(self, db, monkeypatch):
        store = RecordStore(db)
        monkeypatch.setattr(db, "commit", _boom)
        with pytest.raises(StorageError):
            store.append(Collection.appointments, {"name": "Asha"})
        monkeypatch.undo()
        assert store.list(Collection.appointments) == []


class TestList:

    def test_empty_collection(self, db):
        assert RecordStore(db).list(Collection.feedback) == []

    def test_collections_do_not_leak(self, db):
        store = RecordStore(db)
        store.append(Collection.appointments, {"name": "Asha"})
        assert store.list(Collection.feedback) == []
        assert store.list(Collection.payments) == []

    def test_contents_in_insertion_order(self, db):
        store = RecordStore(db)
        ids = [store.append(Collection.appointments, {"n": i})["id"] for i in range(3)]
        assert [r["id"] for r in store.contents(Collection.appointments)] == ids
        assert [r["id"] for r in store.list(Collection.appointments)] == list(reversed(ids))


class TestUpdateField:

    def test_merges_patch(self, db):
        store = RecordStore(db)
        record = store.append(Collection.appointments, {"name": "Asha", "status": "pending"})
        updated = store.update_field(Collection.appointments, record["id"], {"status": "done"})
        assert updated == {**record, "status": "done"}
        assert store.contents(Collection.appointments) == [updated]

    def test_unknown_id(self, db):
        with pytest.raises(NotFound):
            RecordStore(db).update_field(Collection.appointments, "apt_nope", {"status": "done"})

    def test_numeric_id_matches_string(self, db):
        store = RecordStore(db)
        store.append(Collection.appointments, {"id": 42, "name": "Asha"})
        assert store.update_field(Collection.appointments, "42", {"status": "done"})["id"] == 42


class TestReplaceAll:

    def test_installs_records_verbatim(self, db):
        store = RecordStore(db)
        store.append(Collection.appointments, {"name": "Old"})
        records = [
            {"id": "apt_a", "name": "A", "timestamp": "2026-01-01T10:00:00.000Z"},
            {"id": "apt_b", "name": "B", "timestamp": "2026-01-02T10:00:00.000Z"},
        ]
        assert store.replace_all(Collection.appointments, records) == 2
        assert store.list(Collection.appointments) == list(reversed(records))

    def test_failure_keeps_old_contents(self, db, monkeypatch):
        store = RecordStore(db)
        old = store.append(Collection.appointments, {"name": "Old"})
        monkeypatch.setattr(db, "commit", _boom)
        with pytest.raises(StorageError):
            store.replace_all(Collection.appointments, [{"id": "apt_new", "timestamp": utc_timestamp()}])
        monkeypatch.undo()
        assert store.list(Collection.appointments) == [old]


class TestRemoveAll:

    def test_empties_only_that_collection(self, db):
        store = RecordStore(db)
        store.append(Collection.appointments, {"name": "Asha"})
        feedback = store.append(Collection.feedback, {"message": "Nice"})
        assert store.remove_all(Collection.appointments) == 1
        assert store.list(Collection.appointments) == []
        assert store.list(Collection.feedback) == [feedback]


class TestTimestamps:

    def test_format(self):
        from datetime import datetime, timezone
        moment = datetime(2026, 10, 18, 9, 30, 5, 123456, tzinfo=timezone.utc)
        assert utc_timestamp(moment) == "2026-10-18T09:30:05.123Z"

    def test_parse_round_trip(self):
        value = "2026-10-18T09:30:05.123Z"
        assert utc_timestamp(parse_timestamp(value)) == value
