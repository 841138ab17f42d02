"""
Content store for the CAMARA site.

One ContentStore instance owns every collection plus the hero/site settings
and the admin session. Each mutation writes the full snapshot back to its
storage backend under the store name, and ``ContentStore.open`` rehydrates
it at startup.

Lookups by id never raise: ``update`` and ``delete`` on an unknown id change
nothing and return False so callers can decide whether that is an error.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pydantic import TypeAdapter

import config
from auth import AdminCredentials, default_credentials
from defaults import default_state
from schemas import (
    AdminSession,
    AdminUser,
    HeroSettings,
    PortfolioItem,
    Review,
    Service,
    SiteSettings,
    Statistic,
    StoreState,
    YouTubeVideo,
    utcnow,
)

logger = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
    return f"{prefix}{ObjectId()}"


class Collection:
    """CRUD over one ordered list of records inside the store state."""

    def __init__(self, store: "ContentStore", field: str, item_type, id_prefix: str):
        self._store = store
        self.field = field
        self.id_prefix = id_prefix
        self._adapter = TypeAdapter(item_type)

    def _items(self) -> list:
        return getattr(self._store.state, self.field)

    def _write(self, items: list) -> None:
        setattr(self._store.state, self.field, items)
        self._store.commit()

    def __len__(self) -> int:
        return len(self._items())

    def validate(self, item):
        return self._adapter.validate_python(item)

    def all(self) -> list:
        return list(self._items())

    def get(self, item_id: str):
        return next((it for it in self._items() if it.id == item_id), None)

    def next_order(self) -> int:
        return len(self._items()) + 1

    def replace_all(self, items: Iterable) -> None:
        self._write([self.validate(it) for it in items])

    def add(self, item):
        record = self.validate(item)
        self._write(self._items() + [record])
        return record

    def create(self, data: Dict[str, Any], prefix: Optional[str] = None):
        """Add a new record, assigning it a fresh id."""
        return self.add({**data, "id": new_id(prefix or self.id_prefix)})

    def update(self, item_id: str, partial: Dict[str, Any]) -> bool:
        items = self._items()
        for index, current in enumerate(items):
            if current.id != item_id:
                continue
            # Shallow merge; nested objects are replaced whole
            merged = {**current.model_dump(), **partial, "id": item_id}
            updated = self.validate(merged)
            self._write(items[:index] + [updated] + items[index + 1:])
            return True
        logger.debug("update on %s: no record with id %s", self.field, item_id)
        return False

    def delete(self, item_id: str) -> bool:
        items = self._items()
        for index, current in enumerate(items):
            if current.id == item_id:
                self._write(items[:index] + items[index + 1:])
                return True
        logger.debug("delete on %s: no record with id %s", self.field, item_id)
        return False


class ContentStore:
    def __init__(
        self,
        storage,
        name: str = config.STORE_NAME,
        state: Optional[StoreState] = None,
        credentials: Optional[AdminCredentials] = None,
    ):
        self.storage = storage
        self.name = name
        self.state = state if state is not None else default_state()
        self.credentials = credentials or default_credentials()

        self.statistics = Collection(self, "statistics", Statistic, "stat")
        self.portfolio = Collection(self, "portfolio", PortfolioItem, "p")
        self.youtube_videos = Collection(self, "youtube_videos", YouTubeVideo, "yt")
        self.reviews = Collection(self, "reviews", Review, "r")
        self.services = Collection(self, "services", Service, "svc")

    @classmethod
    def open(cls, storage, name: str = config.STORE_NAME, credentials: Optional[AdminCredentials] = None):
        """Rehydrate from storage, falling back to the seed content."""
        state = None
        try:
            data = storage.load(name)
            if data is not None:
                state = StoreState.model_validate(data)
                logger.info("Rehydrated store %s", name)
        except ValueError:
            logger.exception("Stored snapshot %s could not be read, starting from seed content", name)
        return cls(storage, name=name, state=state, credentials=credentials)

    def commit(self) -> None:
        self.storage.save(self.name, self.state.model_dump(mode="json"))
        logger.debug("Persisted store %s", self.name)

    def collection(self, field: str) -> Collection:
        return {
            "statistics": self.statistics,
            "portfolio": self.portfolio,
            "youtube_videos": self.youtube_videos,
            "reviews": self.reviews,
            "services": self.services,
        }[field]

    # Singletons are replaced whole; callers merge nested settings themselves

    @property
    def site_settings(self) -> SiteSettings:
        return self.state.site_settings

    def set_site_settings(self, settings) -> SiteSettings:
        self.state.site_settings = SiteSettings.model_validate(settings)
        self.commit()
        return self.state.site_settings

    @property
    def hero_settings(self) -> HeroSettings:
        return self.state.hero_settings

    def set_hero_settings(self, settings) -> HeroSettings:
        self.state.hero_settings = HeroSettings.model_validate(settings)
        self.commit()
        return self.state.hero_settings

    # Session

    @property
    def session(self) -> AdminSession:
        return self.state.admin

    def login(self, email: str, password: str) -> bool:
        if not self.credentials.check(email, password):
            logger.info("Rejected admin login for %s", email)
            return False
        self.state.admin = AdminSession(
            is_authenticated=True,
            admin_user=AdminUser(email=email, name=self.credentials.name),
        )
        self.commit()
        logger.info("Admin %s logged in", email)
        return True

    def logout(self) -> None:
        self.state.admin = AdminSession()
        self.commit()

    def add_portfolio_batch(self, records: List[Dict[str, Any]]) -> List[PortfolioItem]:
        """Store upload pipeline output, one ``add`` per record."""
        added = []
        for record in records:
            prefix = "v" if record.get("type") == "video" else "p"
            added.append(self.portfolio.add({**record, "id": new_id(prefix), "created_at": utcnow()}))
        return added
