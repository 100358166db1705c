"""Relation domain models and the rules for merging relation signals."""

from enum import Enum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

if TYPE_CHECKING:
    from notegraph.domain.page import Page

Axis = Literal["parent", "child", "friend"]


class RelationType(str, Enum):
    """Provenance of a relation.

    DEFINED relations were authored explicitly in a note, INFERRED relations
    were derived from the counterpart of another relation.
    """

    DEFINED = "defined"
    INFERRED = "inferred"


class Relation(BaseModel):
    """Merged raw relation signals from an owner page to one neighbour.

    Every axis (parent, child, friend) is tracked independently, so several
    flags may be set at once. The classifier turns these raw signals into a
    single resolved kind.

    Attributes:
        target: The neighbour page (shared reference, not owned)
        is_parent: The neighbour was recorded as a parent of the owner
        parent_type: Provenance of the parent signal
        parent_type_definition: Comma separated field names behind the parent signal
        is_child: The neighbour was recorded as a child of the owner
        child_type: Provenance of the child signal
        child_type_definition: Comma separated field names behind the child signal
        is_friend: The neighbour was recorded as a friend of the owner
        friend_type: Provenance of the friend signal
        friend_type_definition: Comma separated field names behind the friend signal
    """

    target: "Page"
    is_parent: bool = False
    parent_type: RelationType | None = None
    parent_type_definition: str | None = None
    is_child: bool = False
    child_type: RelationType | None = None
    child_type_definition: str | None = None
    is_friend: bool = False
    friend_type: RelationType | None = None
    friend_type_definition: str | None = None

    model_config = {"arbitrary_types_allowed": True}


class Neighbour(BaseModel):
    """Classified view of a relation, as returned by page queries."""

    page: "Page"
    relation_type: RelationType | None = None
    type_definition: str | None = None

    model_config = {"arbitrary_types_allowed": True}


class RelationToPage(BaseModel):
    """Single label describing how a page relates to another page."""

    type: Literal["parent", "child", "friend"]
    relation_type: RelationType | None = None
    type_definition: str | None = None


def merge_relation_type(
    current: RelationType | None, new: RelationType | None
) -> RelationType | None:
    """Merge a new provenance into the current one. DEFINED is never demoted."""
    if current == RelationType.DEFINED:
        return RelationType.DEFINED
    if current == RelationType.INFERRED:
        return RelationType.DEFINED if new == RelationType.DEFINED else RelationType.INFERRED
    return new


def concat_definitions(current: str | None, new: str | None) -> str | None:
    """Append a definition to the accumulated ones, skipping exact repeats.

    Args:
        current: Definitions recorded so far, joined with ", "
        new: Definition to add

    Returns:
        The accumulated definitions
    """
    if not current:
        return new
    if not new or new in current.split(", "):
        return current
    return f"{current}, {new}"


def upsert_relation(
    current: Relation | None,
    target: "Page",
    axis: Axis,
    relation_type: RelationType,
    definition: str | None = None,
) -> Relation:
    """Create a relation for one axis, or merge the axis into an existing relation.

    Args:
        current: Existing relation to the target, if any
        target: The neighbour page
        axis: Which signal to set ("parent", "child" or "friend")
        relation_type: Provenance of the new signal
        definition: Field name that produced the signal

    Returns:
        The new or updated relation
    """
    if current is None:
        relation = Relation(
            target=target,
            is_parent=False,
            parent_type=None,
            parent_type_definition=None,
            is_child=False,
            child_type=None,
            child_type_definition=None,
            is_friend=False,
            friend_type=None,
            friend_type_definition=None,
        )
    else:
        relation = current

    type_field = f"{axis}_type"
    definition_field = f"{axis}_type_definition"

    setattr(relation, f"is_{axis}", True)
    setattr(
        relation, type_field, merge_relation_type(getattr(relation, type_field), relation_type)
    )
    setattr(
        relation,
        definition_field,
        concat_definitions(getattr(relation, definition_field), definition),
    )
    return relation
