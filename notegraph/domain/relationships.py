"""Link facts and hierarchy field definitions."""

from typing import Literal

from pydantic import BaseModel


class LinkFact(BaseModel):
    """A normalized link discovered in a note.

    kind is the hierarchy field category the link was found under, or "link"
    for a plain wikilink in the note body.
    """

    source: str
    target: str
    kind: Literal["parent", "child", "friend", "link"]
    definition: str | None = None  # field name the link came from


class HierarchyDefinition(BaseModel):
    """Metadata field names that express parent, child and friend relations."""

    parents: list[str] = ["Parent", "Parents", "up", "North", "origin", "source"]
    children: list[str] = ["Children", "Child", "down", "South", "leads to", "next"]
    friends: list[str] = ["Friends", "Friend", "Jump", "Jumps", "similar", "supports"]
