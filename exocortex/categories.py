"""Category canonicalizer: merge-candidate preview for inconsistent spellings.

Raw categories that are equal after trimming and case-folding form a group.
Groups observed with more than one raw spelling are proposed for merging into
a single headline-cased name. Read-only: applying a merge is a separate store
call the caller issues after review.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from exocortex.domain.models import Event
from shared.config import settings

logger = structlog.get_logger()


def headline_case(name: str) -> str:
    """First letter upper-cased, remainder lower-cased."""
    return name[:1].upper() + name[1:].lower()


def display_name(raw: str, blank_name: str | None = None) -> str:
    """Trimmed name; whitespace-only names preview as the configured blank name."""
    trimmed = raw.strip()
    if trimmed:
        return trimmed
    return settings.blank_category_name if blank_name is None else blank_name


def grouping_key(raw: str, blank_name: str | None = None) -> str:
    return display_name(raw, blank_name).casefold()


@dataclass(frozen=True)
class CategoryGroup:
    """A canonical name and the raw spellings that normalize to it."""

    canonical: str
    variants: dict[str, int] = field(default_factory=dict)

    @property
    def event_count(self) -> int:
        return sum(self.variants.values())


@dataclass(frozen=True)
class CategoryMerge:
    """Rename every listed raw spelling to `target`. Describes, never applies."""

    sources: frozenset[str]
    target: str

    @classmethod
    def from_group(cls, group: CategoryGroup) -> "CategoryMerge":
        return cls(sources=frozenset(group.variants), target=group.canonical)

    def affected_event_ids(self, events: Iterable[Event]) -> list[str]:
        return [
            e.id for e in events if e.category in self.sources and e.category != self.target
        ]


def merge_candidates_from_names(
    names: Iterable[str], blank_name: str | None = None
) -> list[CategoryGroup]:
    """Group raw category strings; keep only groups with more than one spelling."""
    spellings: dict[str, Counter[str]] = defaultdict(Counter)
    for raw in names:
        spellings[grouping_key(raw, blank_name)][raw] += 1

    groups = []
    for counts in spellings.values():
        if len(counts) < 2:
            continue
        first_raw = next(iter(counts))
        groups.append(
            CategoryGroup(
                canonical=headline_case(display_name(first_raw, blank_name)),
                variants=dict(counts),
            )
        )
    groups.sort(key=lambda g: g.canonical)
    return groups


def merge_candidates(
    events: Iterable[Event], blank_name: str | None = None
) -> list[CategoryGroup]:
    """Merge candidates across the full event list."""
    groups = merge_candidates_from_names((e.category for e in events), blank_name)
    if groups:
        logger.info(
            "category_merge_candidates_found",
            groups=len(groups),
            canonical=[g.canonical for g in groups],
        )
    return groups


def category_frequencies(events: Iterable[Event]) -> list[tuple[str, int]]:
    """Distinct trimmed categories with event counts, most frequent first, ties by name."""
    counts = Counter(e.category_label for e in events)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))
