"""Search links for tutorial videos and parts retailers."""

from __future__ import annotations

from typing import List, Sequence
from urllib.parse import quote

from repair_api.expert.schemas import VehicleDescription

VIDEO_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"

# Store name -> search URL template. Order decides which candidate part each
# store is searched for.
PARTS_STORES = (
    ("oreilly", "https://www.oreillyauto.com/search?query={query}"),
    ("autozone", "https://www.autozone.com/searchresult?searchText={query}"),
    ("advance", "https://shop.advanceautoparts.com/search?searchText={query}"),
)

VIDEO_PREFIX = "🔧 "
STORE_PREFIX = "🛒 "


def encode_component(text: str) -> str:
    """Percent-encode a query value, leaving the URI-unreserved marks alone."""
    return quote(text, safe="!~*'()")


def _join(*words) -> str:
    return " ".join(w for w in words if w)


def video_queries(request: VehicleDescription) -> List[str]:
    """Search phrases for repair tutorials, most specific first, no repeats."""
    vehicle = request.vehicle_label()
    queries = []
    if request.code:
        queries.append(f"how to repair diagnose {request.code}")
    if request.part:
        queries.append(_join(request.part, vehicle, "repair tutorial"))
    general = _join(vehicle, request.part)
    if general:
        queries.append(f"{general} repair")
    return list(dict.fromkeys(queries))


def video_search_links(request: VehicleDescription, limit: int = 3) -> List[str]:
    return [
        VIDEO_PREFIX + VIDEO_SEARCH_URL.format(query=encode_component(q))
        for q in video_queries(request)[:limit]
    ]


def parts_candidates(request: VehicleDescription, suggested: Sequence[str]) -> List[str]:
    """The user's own part first, then the model's suggestions."""
    candidates = list(suggested)
    if request.part and request.part not in candidates:
        candidates.insert(0, request.part)
    return candidates


def parts_store_links(request: VehicleDescription, candidates: Sequence[str]) -> List[str]:
    """One search link per store.

    Store ``i`` searches for candidate ``i``, falling back to the first
    candidate. Stores with nothing to search for are skipped.
    """
    first = candidates[0] if candidates else ""
    vehicle = request.vehicle_label()
    links = []
    for index, (_, template) in enumerate(PARTS_STORES):
        part = candidates[index] if index < len(candidates) else first
        query = _join(vehicle, part)
        if not query:
            continue
        links.append(STORE_PREFIX + template.format(query=encode_component(query)))
    return links
