# core/feedback.py
from typing import Dict, List, Optional, Sequence

from .models import FeedbackEntry


def filter_by_rating(
    entries: Sequence[FeedbackEntry], rating: Optional[int] = None
) -> List[FeedbackEntry]:
    if rating is None:
        return list(entries)
    return [e for e in entries if e.rating == rating]


def toggle_rating_filter(current: Optional[int], rating: int) -> Optional[int]:
    # Picking the active star again clears the filter
    return None if current == rating else rating


def average_rating(entries: Sequence[FeedbackEntry]) -> Optional[float]:
    if not entries:
        return None
    return round(sum(e.rating for e in entries) / len(entries), 2)


def rating_histogram(entries: Sequence[FeedbackEntry]) -> Dict[int, int]:
    hist = {r: 0 for r in range(1, 6)}
    for e in entries:
        hist[e.rating] = hist.get(e.rating, 0) + 1
    return hist


def format_price(amount: float | None) -> str:
    if amount is None or amount < 0:
        return "Unavailable"
    return f"${amount:.2f}"
