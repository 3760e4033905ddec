"""
Free-text entity search across loaded packs.
"""

from typing import Iterable, List, Optional, Tuple

from .models import SearchResult
from .pack import ContentPack

MAX_RESULTS = 100


def _is_exact(result: SearchResult, query: str) -> bool:
    if result.entity_id.lower() == query:
        return True
    return result.display_name is not None and result.display_name.lower() == query


def search_packs(
    packs: Iterable[ContentPack],
    query: str,
    entity_types: Optional[List[str]] = None,
    limit: int = MAX_RESULTS,
) -> List[SearchResult]:
    """Case-insensitive substring search on entity id and display name.

    Exact matches come first, the rest is sorted by display name (or id).

    Args:
        packs: Packs to search, already filtered by the caller
        query: Text to look for
        entity_types: Only return entities of these types if given
        limit: Maximum number of results

    Returns:
        Ranked search results
    """
    query_lower = query.lower()
    results: List[SearchResult] = []

    for pack in packs:
        for key, record in pack.items():
            meta = record.meta
            if entity_types is not None and meta.entity_type not in entity_types:
                continue

            name = meta.display_name
            if query_lower in meta.id.lower() or (
                name is not None and query_lower in name.lower()
            ):
                results.append(
                    SearchResult(
                        pack_id=pack.id,
                        pack_name=pack.name,
                        entity_key=key,
                        entity_id=meta.id,
                        entity_type=meta.entity_type,
                        display_name=name,
                    )
                )

    def rank(result: SearchResult) -> Tuple[bool, str]:
        sort_name = result.display_name if result.display_name is not None else result.entity_id
        return (not _is_exact(result, query_lower), sort_name)

    results.sort(key=rank)
    return results[:limit]
