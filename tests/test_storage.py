import uuid

from jobportal import storage
from jobportal.models import ClientRecord
from jobportal.storage import PROFILE_KEY, SESSION_KEYS, RecordStore


def test_put_and_get(store):
    store.put(PROFILE_KEY, {"first_name": "Ada"})
    assert store.get(PROFILE_KEY) == {"first_name": "Ada"}
    assert store.exists(PROFILE_KEY)


def test_missing_record_returns_default(store):
    assert store.get(PROFILE_KEY) is None
    assert store.get(PROFILE_KEY, {}) == {}
    assert not store.exists(PROFILE_KEY)


def test_put_replaces_previous_value(store):
    store.put(PROFILE_KEY, {"first_name": "Ada"})
    store.put(PROFILE_KEY, {"first_name": "Grace"})
    assert store.get(PROFILE_KEY) == {"first_name": "Grace"}
    assert store.db.query(ClientRecord).filter(ClientRecord.client_id == store.client_id).count() == 1


def test_records_are_scoped_per_client(db, store):
    other = RecordStore(db, uuid.uuid4().hex)
    store.put(PROFILE_KEY, {"first_name": "Ada"})
    assert other.get(PROFILE_KEY) is None


def test_delete_counts_removed_records(store):
    store.put(SESSION_KEYS[0], "token")
    store.put(SESSION_KEYS[1], {"id": 1})
    assert store.delete(*SESSION_KEYS) == 2
    assert store.delete(*SESSION_KEYS) == 0


def test_undecodable_record_reads_as_default(store):
    store.put(PROFILE_KEY, {})
    row = store._row(PROFILE_KEY)
    row.payload = "{not json"
    store.db.commit()
    assert store.get(PROFILE_KEY, "fallback") == "fallback"


def test_newer_schema_version_reads_as_default(store):
    store.put(PROFILE_KEY, {"first_name": "Ada"})
    row = store._row(PROFILE_KEY)
    row.schema_version = storage.CURRENT_SCHEMA_VERSION + 1
    store.db.commit()
    assert store.get(PROFILE_KEY) is None


def test_older_record_is_upgraded_on_read(monkeypatch, store):
    store.put(PROFILE_KEY, {"name": "Ada Lovelace"})

    def split_name(record):
        first, _, last = record.pop("name").partition(" ")
        return dict(record, first_name=first, last_name=last)

    monkeypatch.setattr(storage, "CURRENT_SCHEMA_VERSION", 2)
    monkeypatch.setitem(storage.RECORD_UPGRADES, (PROFILE_KEY, 1), split_name)

    assert store.get(PROFILE_KEY) == {"first_name": "Ada", "last_name": "Lovelace"}


def test_record_without_upgrade_path_reads_as_default(monkeypatch, store):
    store.put(PROFILE_KEY, {"first_name": "Ada"})
    monkeypatch.setattr(storage, "CURRENT_SCHEMA_VERSION", 2)
    assert store.get(PROFILE_KEY, {}) == {}
