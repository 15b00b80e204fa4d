# core/errors.py


class CatalogError(Exception):
    """Base class for toy catalog failures."""


class NetworkError(CatalogError):
    """Transport failure or non-success status while talking to the catalog API."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NotFoundError(CatalogError):
    """The catalog API does not know the requested toy."""

    def __init__(self, item_id):
        super().__init__(f"Toy {item_id!r} not found")
        self.item_id = item_id


class StorageError(CatalogError):
    """Local key-value storage could not be read or written."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
