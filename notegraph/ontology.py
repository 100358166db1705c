"""Suggestions for hierarchy field names while writing a note."""

from typing import Literal

from pydantic import BaseModel

from notegraph.domain.relationships import HierarchyDefinition

FieldKind = Literal["all", "parent", "child", "friend"]


class FieldTriggers(BaseModel):
    """Line prefixes that ask for field name suggestions."""

    all: str = ":::"
    parent: str = "::p"
    child: str = "::c"
    friend: str = "::f"


def detect_field_trigger(line: str, triggers: FieldTriggers) -> tuple[FieldKind, str] | None:
    """Detect a suggestion trigger at the start of a line.

    Args:
        line: Text of the line up to the cursor
        triggers: Configured trigger prefixes

    Returns:
        Tuple of (field kind, query typed after the trigger), or None
    """
    candidates: list[tuple[FieldKind, str]] = [
        ("all", triggers.all),
        ("parent", triggers.parent),
        ("child", triggers.child),
        ("friend", triggers.friend),
    ]
    for kind, trigger in candidates:
        if trigger and line.startswith(trigger):
            return kind, line[len(trigger) :]
    return None


def field_names(hierarchy: HierarchyDefinition, kind: FieldKind = "all") -> list[str]:
    if kind == "parent":
        return list(hierarchy.parents)
    if kind == "child":
        return list(hierarchy.children)
    if kind == "friend":
        return list(hierarchy.friends)
    return sorted(hierarchy.parents + hierarchy.children + hierarchy.friends, key=str.lower)


def suggest_fields(
    hierarchy: HierarchyDefinition, query: str, kind: FieldKind = "all"
) -> list[str]:
    """Field names of the given kind containing the query, case-insensitively."""
    needle = query.lower()
    return [name for name in field_names(hierarchy, kind) if needle in name.lower()]


def format_field(name: str) -> str:
    """Text inserted into the note for a chosen field name."""
    return f"{name}:: "
