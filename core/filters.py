# core/filters.py
from typing import Dict, Hashable, Iterable, List, Sequence

from .models import ALL, BRANDS, Item


def _name_matches(item: Item, needle: str) -> bool:
    return needle in item.name.lower()


def filter_items(items: Sequence[Item], query: str = "", category: str = ALL) -> List[Item]:
    """
    Return the items to display for a search box and brand selector.
    - query: case-insensitive substring of the toy name; "" matches all
    - category: ALL, or an exact brand that must equal item.company
    Input order is preserved.
    """
    needle = (query or "").lower()
    if category == ALL:
        return [it for it in items if _name_matches(it, needle)]
    return [it for it in items if it.company == category and _name_matches(it, needle)]


def count_by_category(items: Sequence[Item], category: str) -> int:
    """Badge count for a brand; the search query is ignored."""
    if category == ALL:
        return len(items)
    return sum(1 for it in items if it.company == category)


def category_counts(
    items: Sequence[Item], categories: Iterable[str] = (ALL, *BRANDS)
) -> Dict[str, int]:
    return {c: count_by_category(items, c) for c in categories}


def filter_saved(
    items: Sequence[Item], saved_ids: Iterable[Hashable], query: str = ""
) -> List[Item]:
    """Items the user saved whose names match `query`, in catalog order."""
    saved = set(saved_ids)
    needle = (query or "").lower()
    return [it for it in items if it.item_id in saved and _name_matches(it, needle)]
