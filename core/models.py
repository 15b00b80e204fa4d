# core/models.py
import datetime
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytz

from .logger import get_logger

logger = get_logger(__name__)

ALL = "All"
BRANDS = (
    "Bandai",
    "Banpresto",
    "Good Smile Company",
    "Hot Toys",
    "Dark Horse",
    "McFarlane Toys",
)


def parse_timestamp(value: Any) -> Optional[datetime.datetime]:
    """
    Normalize an API timestamp to an aware UTC datetime.
    Accepts ISO-8601 strings (with or without a trailing Z) and epoch seconds.
    Returns None when the value cannot be interpreted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(value, tz=pytz.UTC)
        except (OverflowError, OSError, ValueError):
            return None

    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(out) or math.isinf(out):
        return default
    return out


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


@dataclass
class FeedbackEntry:
    rating: int
    comment: str = ""
    author: str = ""
    date: Optional[datetime.datetime] = None

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "FeedbackEntry":
        if not isinstance(rec, dict):
            raise ValueError(f"Feedback record must be an object, got {type(rec).__name__}")
        try:
            rating = int(rec.get("rating"))
        except (TypeError, ValueError):
            raise ValueError(f"Feedback record has no usable rating: {rec!r}")
        return cls(
            rating=min(5, max(1, rating)),
            comment=str(rec.get("comment") or ""),
            author=str(rec.get("author") or ""),
            date=parse_timestamp(rec.get("date")),
        )


@dataclass
class Item:
    """
    A toy as served by the catalog API.
    `discount` is a fraction (0.25 means 25% off); 0 means no deal.
    """
    item_id: Any
    name: str
    company: str = ""
    price: float = 0.0
    discount: float = 0.0
    sold_out: bool = False
    description: str = ""
    image_url: str = ""
    feedback: List[FeedbackEntry] = field(default_factory=list)

    @property
    def is_discounted(self) -> bool:
        return self.discount > 0

    @property
    def sale_price(self) -> float:
        return round(self.price * (1 - self.discount), 2)

    @property
    def discount_percent(self) -> int:
        return math.floor(self.discount * 100)

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "Item":
        """Build an Item from one `ListOfToys` record."""
        if not isinstance(rec, dict):
            raise ValueError(f"Toy record must be an object, got {type(rec).__name__}")
        item_id = rec.get("id")
        if item_id is None or item_id == "":
            raise ValueError(f"Toy record has no id: {rec!r}")
        if isinstance(item_id, bool) or not isinstance(item_id, (str, int)):
            raise ValueError(f"Toy id must be a string or integer, got {item_id!r}")

        discount = _to_float(rec.get("limitedTimeDeal"))
        if not 0 <= discount < 1:
            logger.debug("Ignoring out-of-range deal %r on toy %r", discount, item_id)
            discount = 0.0

        feedback: List[FeedbackEntry] = []
        for c in rec.get("comments") or []:
            try:
                feedback.append(FeedbackEntry.from_record(c))
            except ValueError as e:
                logger.debug("Skipping feedback on toy %r: %s", item_id, e)

        return cls(
            item_id=item_id,
            name=str(rec.get("toyName") or "").strip(),
            company=str(rec.get("company") or "").strip(),
            price=max(0.0, _to_float(rec.get("price"))),
            discount=discount,
            sold_out=_to_bool(rec.get("soldOut")),
            description=str(rec.get("toyDescription") or ""),
            image_url=str(rec.get("image") or ""),
            feedback=feedback,
        )
