"""
Snapshot storage for the content store.

The whole store is kept as one namespaced record (one JSON document keyed by
the store name). By default the record lives in a JSON file under
``STORE_DIR``; when ``DATABASE_URL`` is set it lives in the "store" collection
of MongoDB instead.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from pymongo import MongoClient

import config

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "camara")

db = None
if DATABASE_URL:
    client = MongoClient(DATABASE_URL)
    db = client[DATABASE_NAME]


class FileSnapshotStorage:
    """One ``<name>.json`` file per store name."""

    backend = "file"

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, name: str) -> str:
        return os.path.join(self.directory, f"{name}.json")

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        path = self._path(name)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, name: str, data: Dict[str, Any]) -> None:
        os.makedirs(self.directory, exist_ok=True)
        path = self._path(name)
        tmp_path = path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, path)

    def describe(self) -> Dict[str, Any]:
        return {"storage_backend": self.backend, "storage_location": self.directory}


class MongoSnapshotStorage:
    """One document per store name in the "store" collection."""

    backend = "mongodb"

    def __init__(self, database, collection: str = "store"):
        self.database = database
        self.collection = database[collection]

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        doc = self.collection.find_one({"_id": name})
        if not doc:
            return None
        return doc.get("state")

    def save(self, name: str, data: Dict[str, Any]) -> None:
        self.collection.replace_one({"_id": name}, {"_id": name, "state": data}, upsert=True)

    def describe(self) -> Dict[str, Any]:
        return {
            "storage_backend": self.backend,
            "storage_location": getattr(self.database, "name", DATABASE_NAME),
            "collections": self.database.list_collection_names()[:10],
        }


def open_storage():
    if db is not None:
        logger.info("Using MongoDB snapshot storage (%s)", DATABASE_NAME)
        return MongoSnapshotStorage(db)
    logger.info("Using file snapshot storage in %s", config.STORE_DIR)
    return FileSnapshotStorage(config.STORE_DIR)
