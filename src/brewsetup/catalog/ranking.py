"""Rank catalog entries for search results and category views."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from rapidfuzz import fuzz

from brewsetup.catalog.merge import merge
from brewsetup.core.errors import UnknownCategoryError
from brewsetup.core.models import CatalogEntry, ToolCategory

EDITORS_PICKS = "dev-picks"

FUZZY_THRESHOLD = 0.3
FUZZY_DISTANCE = 100
MIN_MATCH_LENGTH = 2
FIELD_WEIGHTS = (("name", 2.0), ("description", 1.0))

POPULAR_MINIMUM = 10
POPULAR_CAP = 50
DEFAULT_WINDOW = 30

_WORD_SPLIT = re.compile(r"[\s\-_./]+")

Category = ToolCategory | str | None


@dataclass(frozen=True)
class SearchHit:
    entry: CatalogEntry
    score: float


def resolve_category(category: Category) -> ToolCategory | str | None:
    """Turn a user supplied category into a ToolCategory or EDITORS_PICKS.

    Raises:
        UnknownCategoryError: If the value names no category.
    """
    if category is None or isinstance(category, ToolCategory):
        return category
    value = category.strip().lower()
    if not value or value == "all":
        return None
    if value == EDITORS_PICKS:
        return EDITORS_PICKS
    try:
        return ToolCategory(value)
    except ValueError:
        raise UnknownCategoryError(category=category) from None


def field_score(query: str, text: str, distance: int = FUZZY_DISTANCE) -> float:
    """Score how well ``query`` matches ``text``; 0 is exact, 1 is no match.

    The best partial alignment sets the similarity, and matches further into
    the text are penalised by ``offset / distance``.
    """
    if not text:
        return 1.0
    text = text.lower()
    alignment = fuzz.partial_ratio_alignment(query, text)
    if alignment is None or alignment.score == 0:
        return 1.0
    offset = alignment.dest_start if len(query) <= len(text) else 0
    return min(1.0, (1.0 - alignment.score / 100.0) + offset / distance)


def fuzzy_matches(
    entries: Iterable[CatalogEntry],
    query: str,
    threshold: float = FUZZY_THRESHOLD,
    distance: int = FUZZY_DISTANCE,
) -> list[SearchHit]:
    """Return entries where any weighted field scores within ``threshold``.

    Hits are ordered by their weighted score, best first.
    """
    q = query.strip().lower()
    total_weight = sum(w for _, w in FIELD_WEIGHTS)
    hits: list[SearchHit] = []

    for entry in entries:
        scores = {
            field: field_score(q, getattr(entry, field) or "", distance)
            for field, _ in FIELD_WEIGHTS
        }
        if not any(s <= threshold for s in scores.values()):
            continue
        weighted = sum(scores[field] * w for field, w in FIELD_WEIGHTS) / total_weight
        hits.append(SearchHit(entry, weighted))

    hits.sort(key=lambda h: h.score)
    return hits


def substring_matches(entries: Iterable[CatalogEntry], query: str) -> list[CatalogEntry]:
    q = query.strip().lower()
    return [
        e for e in entries
        if q in e.name.lower() or q in (e.description or "").lower()
    ]


def _relevance_key(query: str):
    q = query.strip().lower()

    def key(entry: CatalogEntry) -> tuple:
        name = entry.name.lower()
        words = _WORD_SPLIT.split(name)
        return (
            name != q,
            not name.startswith(q),
            not any(w.startswith(q) for w in words if w),
            not entry.popular,
            name,
        )

    return key


def search(entries: Iterable[CatalogEntry], query: str) -> list[CatalogEntry]:
    """Fuzzy search entries and order them by relevance.

    Order: exact name, name prefix, word prefix, popular, then alphabetical.
    Queries shorter than ``MIN_MATCH_LENGTH`` use a plain substring test.

    Args:
        entries: Deduplicated candidates.
        query: Raw search text; blank text matches nothing.

    Returns:
        Matching entries, most relevant first.
    """
    q = query.strip()
    if not q:
        return []

    if len(q) < MIN_MATCH_LENGTH:
        matched = substring_matches(entries, q)
    else:
        matched = [hit.entry for hit in fuzzy_matches(entries, q)]

    return sorted(matched, key=_relevance_key(q))


def rank_default(entries: Sequence[CatalogEntry], show_all: bool = False) -> list[CatalogEntry]:
    """Order entries popular first, then by name, and apply the showcase window.

    Without ``show_all``: at least ``POPULAR_MINIMUM`` popular entries means
    only popular entries are kept, capped at ``POPULAR_CAP``; otherwise the
    first ``DEFAULT_WINDOW`` entries of the full ordering are kept.
    """
    ordered = sorted(entries, key=lambda e: (not e.popular, e.name.lower()))
    if show_all:
        return ordered

    popular = [e for e in ordered if e.popular]
    if len(popular) >= POPULAR_MINIMUM:
        return popular[:POPULAR_CAP]
    return ordered[:DEFAULT_WINDOW]


def query_catalog(
    curated: Sequence[CatalogEntry],
    remote: Sequence[CatalogEntry],
    search_text: str | None = None,
    category: Category = None,
    show_all: bool = False,
) -> list[CatalogEntry]:
    """Run the merge and ranking pipeline for one query.

    A non-blank search covers the whole catalog and ignores the category.
    Otherwise the category scopes both lists (EDITORS_PICKS uses the
    curated picks only) and the default ranking applies.
    """
    if search_text and search_text.strip():
        return search(merge(curated, remote), search_text)

    scope = resolve_category(category)
    if scope == EDITORS_PICKS:
        return rank_default(merge([t for t in curated if t.dev_pick]), show_all)
    if scope is None:
        return rank_default(merge(curated, remote), show_all)

    return rank_default(
        merge(
            [t for t in curated if t.category is scope],
            [p for p in remote if p.category is scope],
        ),
        show_all,
    )
