from unittest.mock import MagicMock

import database
from database import FileSnapshotStorage, MongoSnapshotStorage


class TestFileSnapshotStorage:
    def test_missing_snapshot_loads_none(self, tmp_path):
        assert FileSnapshotStorage(str(tmp_path / "nowhere")).load("camara-store") is None

    def test_save_creates_directory_and_round_trips(self, tmp_path):
        storage = FileSnapshotStorage(str(tmp_path / "data"))

        storage.save("camara-store", {"statistics": [], "site_settings": {"site_name": "CAMARA"}})

        assert storage.load("camara-store")["site_settings"]["site_name"] == "CAMARA"
        assert not (tmp_path / "data" / "camara-store.json.tmp").exists()

    def test_names_are_separate(self, tmp_path):
        storage = FileSnapshotStorage(str(tmp_path))
        storage.save("one", {"a": 1})
        storage.save("two", {"a": 2})

        assert storage.load("one") == {"a": 1}


class TestMongoSnapshotStorage:
    def _storage(self):
        collection = MagicMock()
        mongo_db = MagicMock()
        mongo_db.__getitem__.return_value = collection
        return MongoSnapshotStorage(mongo_db), mongo_db, collection

    def test_save_upserts_one_document_per_name(self):
        storage, mongo_db, collection = self._storage()

        storage.save("camara-store", {"statistics": []})

        mongo_db.__getitem__.assert_called_with("store")
        collection.replace_one.assert_called_once_with(
            {"_id": "camara-store"}, {"_id": "camara-store", "state": {"statistics": []}}, upsert=True
        )

    def test_load(self):
        storage, _, collection = self._storage()
        collection.find_one.return_value = {"_id": "camara-store", "state": {"reviews": []}}

        assert storage.load("camara-store") == {"reviews": []}
        collection.find_one.assert_called_once_with({"_id": "camara-store"})

    def test_load_missing(self):
        storage, _, collection = self._storage()
        collection.find_one.return_value = None

        assert storage.load("camara-store") is None


def test_open_storage_defaults_to_file(monkeypatch, tmp_path):
    monkeypatch.setattr(database, "db", None)
    monkeypatch.setattr(database.config, "STORE_DIR", str(tmp_path))

    storage = database.open_storage()

    assert isinstance(storage, FileSnapshotStorage)
    assert storage.directory == str(tmp_path)


def test_open_storage_uses_mongo_when_configured(monkeypatch):
    monkeypatch.setattr(database, "db", MagicMock())

    assert isinstance(database.open_storage(), MongoSnapshotStorage)
