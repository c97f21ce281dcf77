"""
Tag selection choices offered when tagging a paper.

A choice is either an existing tag or the entry that asks for new tag
names. Each variant has its own rendering, selected explicitly.
"""

from dataclasses import dataclass
from typing import Iterable, List, Union

from ..utils import normalize_tag_names, split_comma_list
from .repository import TagUsage


@dataclass(frozen=True)
class ExistingTag:
    """A tag already stored in the library."""
    name: str
    usage_count: int
    tag_id: int


@dataclass(frozen=True)
class NewTagEntry:
    """Placeholder choice for typing new, comma-separated tag names."""
    pass


TagChoice = Union[ExistingTag, NewTagEntry]


def _render_existing(choice: ExistingTag) -> str:
    return f"Tag name: {choice.name}, Usage count: {choice.usage_count}, Tag ID: {choice.tag_id}"


def _render_new_entry(choice: NewTagEntry) -> str:
    return "Add new tag..."


def render_tag_choice(choice: TagChoice) -> str:
    """
    Render a tag choice for display.

    Raises:
        TypeError: If the value is not a TagChoice variant.
    """
    if isinstance(choice, ExistingTag):
        return _render_existing(choice)
    if isinstance(choice, NewTagEntry):
        return _render_new_entry(choice)
    raise TypeError(f"Not a tag choice: {choice!r}")


def build_tag_choices(tags: Iterable[TagUsage]) -> List[TagChoice]:
    """
    Build the list of choices: existing tags by name, then the new-tag entry.

    Args:
        tags: Tags as returned by PaperRepository.list_tags().
    """
    existing = sorted(
        (ExistingTag(name=t.name, usage_count=t.usage_count, tag_id=t.id) for t in tags),
        key=lambda c: (c.name, c.tag_id)
    )
    return [*existing, NewTagEntry()]


def resolve_tag_selection(selected: Iterable[TagChoice], new_tags_input: str = "") -> List[str]:
    """
    Expand selected choices into the final tag names.

    Existing tags contribute their name. Selecting the new-tag entry adds
    every comma-separated name from new_tags_input.

    Returns:
        Normalized, de-duplicated, sorted tag names.
    """
    names: List[str] = []

    for choice in selected:
        if isinstance(choice, ExistingTag):
            names.append(choice.name)
        elif isinstance(choice, NewTagEntry):
            names.extend(split_comma_list(new_tags_input))
        else:
            raise TypeError(f"Not a tag choice: {choice!r}")

    return normalize_tag_names(names)
