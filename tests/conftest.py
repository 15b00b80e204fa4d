"""Shared fixtures: canned catalog records and fake HTTP sessions."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from core.storage import MemoryKeyValueStorage
from fetchers.catalog_api import CatalogClient

BASE_URL = "https://catalog.test"


def make_response(status: int, payload, url: str = BASE_URL) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.encoding = "utf-8"
    if isinstance(payload, (bytes, bytearray)):
        resp._content = bytes(payload)
    else:
        resp._content = json.dumps(payload).encode("utf-8")
    return resp


@pytest.fixture
def toy_records():
    return [
        {
            "id": "1",
            "toyName": "Gundam RX-78-2",
            "company": "Bandai",
            "price": 49.99,
            "limitedTimeDeal": 0.2,
            "toyDescription": "Master Grade kit.",
            "image": "https://img.test/1.png",
            "soldOut": False,
            "comments": [
                {"rating": 5, "comment": "Great", "author": "Kai", "date": "2024-03-01T10:00:00.000Z"},
                {"rating": 3, "comment": "Okay", "author": "Mia", "date": "2024-03-02T10:00:00Z"},
            ],
        },
        {
            "id": "2",
            "toyName": "Iron Man Mark LXXXV",
            "company": "Hot Toys",
            "price": 385,
            "limitedTimeDeal": 0,
            "toyDescription": "Sixth scale figure.",
            "image": "https://img.test/2.png",
            "soldOut": True,
            "comments": [],
        },
        {
            "id": "3",
            "toyName": "Zaku II",
            "company": "Bandai",
            "price": 29.5,
            "limitedTimeDeal": 0,
            "toyDescription": "High Grade kit.",
            "image": "https://img.test/3.png",
            "soldOut": False,
            "comments": [{"rating": 4, "comment": "Fun build", "author": "Leo", "date": 1709287200}],
        },
    ]


@pytest.fixture
def fake_session(toy_records):
    """A requests.Session stand-in serving `toy_records` at BASE_URL."""
    by_id = {rec["id"]: rec for rec in toy_records}
    session = MagicMock(spec=requests.Session)

    def get(url, timeout=None):
        if url == f"{BASE_URL}/ListOfToys":
            return make_response(200, toy_records, url)
        prefix = f"{BASE_URL}/ListOfToys/"
        if url.startswith(prefix):
            rec = by_id.get(url[len(prefix):])
            if rec is None:
                return make_response(404, "Not found", url)
            return make_response(200, rec, url)
        return make_response(404, "Not found", url)

    session.get.side_effect = get
    return session


@pytest.fixture
def client(fake_session):
    return CatalogClient(base_url=BASE_URL, session=fake_session, timeout=5)


@pytest.fixture
def memory_storage():
    return MemoryKeyValueStorage()
