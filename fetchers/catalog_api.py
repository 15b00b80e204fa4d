# fetchers/catalog_api.py
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from core.config import CATALOG_BASE_URL, CATALOG_TIMEOUT, CATALOG_USER_AGENT
from core.errors import NetworkError, NotFoundError
from core.logger import get_logger
from core.models import Item

logger = get_logger(__name__)

TOYS_PATH = "ListOfToys"


def _new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {"User-Agent": CATALOG_USER_AGENT, "Accept": "application/json"}
    )
    return session


class CatalogClient:
    """
    Read-only client for the toy catalog REST API.
    Every call goes to the network; nothing is cached and nothing is retried.
    """

    def __init__(
        self,
        base_url: str = CATALOG_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = CATALOG_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or _new_session()
        self.timeout = timeout

    def _url(self, *parts: str) -> str:
        return "/".join([self.base_url, *parts])

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Catalog request to %s failed: %s", url, e)
            raise NetworkError(f"Request to {url} failed: {e}", url=url) from e

    @staticmethod
    def _json(resp: requests.Response, url: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            logger.error("Catalog returned a non-JSON body from %s: %s", url, e)
            raise NetworkError(
                f"Undecodable response from {url}", status_code=resp.status_code, url=url
            ) from e

    def fetch_all(self) -> List[Item]:
        """Fetch the whole catalog."""
        url = self._url(TOYS_PATH)
        resp = self._get(url)
        if not 200 <= resp.status_code < 300:
            logger.error("Catalog returned HTTP %d for %s", resp.status_code, url)
            raise NetworkError(
                f"HTTP {resp.status_code} from {url}", status_code=resp.status_code, url=url
            )

        data = self._json(resp, url)
        if not isinstance(data, list):
            logger.error("Catalog list at %s is a %s, not an array", url, type(data).__name__)
            raise NetworkError(f"Unexpected catalog payload from {url}", url=url)

        items: List[Item] = []
        for rec in data:
            try:
                items.append(Item.from_record(rec))
            except ValueError as e:
                logger.warning("Skipping malformed toy record: %s", e)

        logger.info("Catalog: fetched %d toys from %s", len(items), url)
        return items

    def fetch_by_id(self, item_id) -> Item:
        """Fetch one toy; NotFoundError when the API does not know `item_id`."""
        url = self._url(TOYS_PATH, quote(str(item_id), safe=""))
        resp = self._get(url)
        if resp.status_code == 404:
            logger.info("Catalog has no toy %r", item_id)
            raise NotFoundError(item_id)
        if not 200 <= resp.status_code < 300:
            logger.error("Catalog returned HTTP %d for %s", resp.status_code, url)
            raise NetworkError(
                f"HTTP {resp.status_code} from {url}", status_code=resp.status_code, url=url
            )

        data = self._json(resp, url)
        # mockapi answers unknown ids with the bare string "Not found"
        if isinstance(data, str) and data.strip().lower() == "not found":
            raise NotFoundError(item_id)
        try:
            item = Item.from_record(data)
        except ValueError as e:
            logger.error("Malformed toy record from %s: %s", url, e)
            raise NetworkError(f"Malformed toy record from {url}", url=url) from e

        logger.debug("Catalog: fetched toy %r (%s)", item.item_id, item.name)
        return item


_default_client: Optional[CatalogClient] = None


def get_default_client() -> CatalogClient:
    global _default_client
    if _default_client is None:
        _default_client = CatalogClient()
    return _default_client


def fetch_all() -> List[Item]:
    return get_default_client().fetch_all()


def fetch_by_id(item_id) -> Item:
    return get_default_client().fetch_by_id(item_id)
