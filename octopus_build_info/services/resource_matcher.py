import logging
from typing import Callable, Iterable

from octopus_build_info.exceptions import NotFoundError

logger = logging.getLogger(__name__)

FALLBACK_NONE = "none"
FALLBACK_LAST = "last"


def fuzzy_match(item: dict, search) -> bool:
    """Tests whether any of the item's Name, Id or Slug equals search."""
    if not search:
        return False
    return item.get("Name") == search or item.get("Id") == search or item.get("Slug") == search


def find_match(items: Iterable[dict], predicate: Callable[[dict], bool], resource_kind: str, search_term,
               fallback: str = FALLBACK_NONE) -> dict:
    """Return the first item accepted by predicate.

    Stops consuming ``items`` at the first match, so a lazily paginated
    collection is never read further than needed. With ``FALLBACK_LAST`` an
    exhausted, non-empty collection yields its final item instead.
    """
    if fallback not in (FALLBACK_NONE, FALLBACK_LAST):
        raise ValueError(f"Unknown fallback policy: {fallback}")

    last = None
    for item in items:
        if predicate(item):
            return item
        last = item

    if fallback == FALLBACK_LAST and last is not None:
        logger.debug(f"No {resource_kind} matched '{search_term}'; falling back to the last one listed")
        return last

    raise NotFoundError(resource_kind, search_term)
