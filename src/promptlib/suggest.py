"""Rule-based prompt suggestions from editor state.

Rules are plain substring/equality tests, grouped by the signal they read.
Every matching rule contributes its records in corpus order; earlier rules
rank ahead of later ones. Nothing here is fuzzy, so the same context always
yields the same suggestions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from promptlib.models.prompt import EditorContext, PromptRecord

DEFAULT_SUGGESTION_LIMIT = 5
DEFAULT_RELATED_LIMIT = 4

RecordPredicate = Callable[["PromptRecord"], bool]


@dataclass(frozen=True)
class SuggestionRule:
    name: str
    applies: Callable[[EditorContext], bool]
    selects: RecordPredicate


def _name_has(*needles: str) -> Callable[[EditorContext], bool]:
    return lambda ctx: any(n in ctx.file_name_lower for n in needles)


def _content_has(*needles: str) -> Callable[[EditorContext], bool]:
    return lambda ctx: any(n in ctx.file_content_lower for n in needles)


def _language_is(*language_ids: str) -> Callable[[EditorContext], bool]:
    return lambda ctx: ctx.language_id in language_ids


def _tagged(*tags: str) -> RecordPredicate:
    return lambda r: any(t in r.tags for t in tags)


def _tagged_all(*tags: str) -> RecordPredicate:
    return lambda r: all(t in r.tags for t in tags)


def _component_or_tagged(component_key: str, *tags: str) -> RecordPredicate:
    return lambda r: r.component_key == component_key or any(t in r.tags for t in tags)


def _either(*predicates: RecordPredicate) -> RecordPredicate:
    return lambda r: any(p(r) for p in predicates)


DEFAULT_RULES: tuple[SuggestionRule, ...] = (
    # file name
    SuggestionRule(
        "controller_file",
        _name_has("controller"),
        _either(_tagged_all("feature", "controller"), _tagged_all("project", "controller")),
    ),
    SuggestionRule("test_file", _name_has("test"), _tagged("testing")),
    SuggestionRule("model_file", _name_has("model", "viewmodel"), _tagged("viewmodel", "model")),
    SuggestionRule("service_file", _name_has("service"), _tagged("service", "foundation")),
    # file content
    SuggestionRule(
        "carousel_content", _content_has("carousel"), _component_or_tagged("carousel", "carousel")
    ),
    SuggestionRule(
        "form_content",
        _content_has("form", "validation"),
        _component_or_tagged("custom_forms", "forms", "validation"),
    ),
    SuggestionRule(
        "navigation_content",
        _content_has("navigation", "menu"),
        _component_or_tagged("navigation", "navigation"),
    ),
    SuggestionRule(
        "search_content", _content_has("search"), _component_or_tagged("search", "search")
    ),
    SuggestionRule("cache_content", _content_has("cache", "caching"), _tagged("cache", "caching")),
    SuggestionRule("config_content", _content_has("config"), _tagged("configuration")),
    # language
    SuggestionRule("csharp_language", _language_is("csharp"), _tagged("foundation", "feature")),
    SuggestionRule("stylesheet_language", _language_is("scss", "css"), _tagged("styling", "scss")),
)


def suggest(
    records: Sequence[PromptRecord],
    context: EditorContext,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    rules: Iterable[SuggestionRule] = DEFAULT_RULES,
) -> list[PromptRecord]:
    """Up to ``limit`` distinct records matched by the rules, first-seen order.

    An empty result means no rule fired; the caller falls back to the full
    picker.
    """
    picked: list[PromptRecord] = []
    seen: set[str] = set()
    for rule in rules:
        if not rule.applies(context):
            continue
        for record in records:
            if record.id in seen or not rule.selects(record):
                continue
            seen.add(record.id)
            picked.append(record)
            if len(picked) >= limit:
                return picked
    return picked


def related(
    records: Sequence[PromptRecord],
    target: PromptRecord,
    limit: int = DEFAULT_RELATED_LIMIT,
) -> list[PromptRecord]:
    """Other records ranked by number of shared tags. Zero overlap is excluded."""
    target_tags = set(target.tags)
    scored = []
    for record in records:
        if record.id == target.id:
            continue
        overlap = sum(1 for tag in record.tags if tag in target_tags)
        if overlap:
            scored.append((overlap, record))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [record for _, record in scored[:limit]]
