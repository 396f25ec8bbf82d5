from typing import Iterable, List, Mapping

from .sections import Item


def merge_headers(headers: Mapping[str, str], items: Iterable[Mapping[str, str]]) -> List[Item]:
    """Overlay global headers onto each item; the item's own fields win.

    Returns new dicts in input order. Neither argument is modified.
    """
    merged: List[Item] = []
    for item in items:
        combined = dict(headers)
        combined.update(item)
        merged.append(combined)
    return merged
