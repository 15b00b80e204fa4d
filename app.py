from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from core.config import DB_PATH, SAVED_ITEMS_KEY
from core.errors import NetworkError, NotFoundError
from core.filters import category_counts, filter_items, filter_saved
from core.logger import get_logger
from core.models import ALL, Item
from core.saved import ItemId, SavedItemsStore
from core.storage import SqliteKeyValueStorage
from fetchers.catalog_api import CatalogClient

logger = get_logger(__name__)

LOAD_ERROR = "Failed to load data"
NOT_FOUND_MESSAGE = "No toy details available"


@dataclass
class HomeView:
    items: List[Item] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    query: str = ""
    category: str = ALL
    error: Optional[str] = None


@dataclass
class DetailView:
    item: Optional[Item] = None
    saved: bool = False
    error: Optional[str] = None


@dataclass
class SavedView:
    items: List[Item] = field(default_factory=list)
    query: str = ""
    error: Optional[str] = None


class CatalogApp:
    """
    Screen-level operations over the catalog client and the saved store.
    Fetch failures become an `error` message on the returned view.
    """

    def __init__(self, client: CatalogClient, store: SavedItemsStore):
        self.client = client
        self.store = store

    def home(self, query: str = "", category: str = ALL) -> HomeView:
        try:
            toys = self.client.fetch_all()
        except NetworkError as e:
            logger.error("Failed to load catalog: %s", e)
            return HomeView(query=query, category=category, error=LOAD_ERROR)

        return HomeView(
            items=filter_items(toys, query, category),
            counts=category_counts(toys),
            query=query,
            category=category,
        )

    def detail(self, item_id: ItemId) -> DetailView:
        try:
            toy = self.client.fetch_by_id(item_id)
        except NotFoundError:
            return DetailView(error=NOT_FOUND_MESSAGE)
        except NetworkError as e:
            logger.error("Error loading toy details for %r: %s", item_id, e)
            return DetailView(error=LOAD_ERROR)
        return DetailView(item=toy, saved=self.store.is_saved(toy.item_id))

    def saved(self, query: str = "") -> SavedView:
        try:
            toys = self.client.fetch_all()
        except NetworkError as e:
            logger.error("Failed to load saved toys: %s", e)
            return SavedView(query=query, error=LOAD_ERROR)
        return SavedView(items=filter_saved(toys, self.store.saved_ids(), query), query=query)

    def toggle_saved(self, item_id: ItemId) -> Future:
        return self.store.toggle(item_id)

    def remove_saved(self, item_ids: Iterable[ItemId]) -> Future:
        return self.store.remove_many(item_ids)

    def close(self) -> None:
        self.store.close()


def build_app(
    db_path: str = DB_PATH,
    client: Optional[CatalogClient] = None,
) -> CatalogApp:
    """Wire the default client and a SQLite-backed saved store, loading saved ids once."""
    store = SavedItemsStore(SqliteKeyValueStorage(db_path), key=SAVED_ITEMS_KEY)
    store.load()
    return CatalogApp(client or CatalogClient(), store)
