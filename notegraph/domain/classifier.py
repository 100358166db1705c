"""Classification of merged relation signals into a single relation kind.

A relation carries independent parent/child/friend signals. The functions here
resolve them, with DEFINED signals on any axis suppressing INFERRED ones.
A symmetric inferred parent+child pair with nothing defined is treated as a
friendship rather than a hierarchy edge.
"""

from typing import Callable, NamedTuple

from notegraph.domain.relations import Relation, RelationType

Classifier = Callable[[Relation], RelationType | None]


class RelationVector(NamedTuple):
    pi: bool  # inferred parent
    pd: bool  # defined parent
    ci: bool  # inferred child
    cd: bool  # defined child
    fd: bool  # friend


def relation_vector(relation: Relation) -> RelationVector:
    # Any friend signal counts, inferred friend edges are the counterpart of a defined one
    return RelationVector(
        pi=relation.is_parent and relation.parent_type == RelationType.INFERRED,
        pd=relation.is_parent and relation.parent_type == RelationType.DEFINED,
        ci=relation.is_child and relation.child_type == RelationType.INFERRED,
        cd=relation.is_child and relation.child_type == RelationType.DEFINED,
        fd=relation.is_friend,
    )


def classify_child(relation: Relation) -> RelationType | None:
    pi, pd, ci, cd, fd = relation_vector(relation)
    if cd and not pd and not fd:
        return RelationType.DEFINED
    if not pi and not pd and ci and not cd and not fd:
        return RelationType.INFERRED
    return None


def classify_parent(relation: Relation) -> RelationType | None:
    pi, pd, ci, cd, fd = relation_vector(relation)
    if not cd and pd and not fd:
        return RelationType.DEFINED
    if pi and not pd and not ci and not cd and not fd:
        return RelationType.INFERRED
    return None


def classify_friend(relation: Relation) -> RelationType | None:
    pi, pd, ci, cd, fd = relation_vector(relation)
    if fd:
        return RelationType.DEFINED
    if pi and not pd and ci and not cd and not fd:
        return RelationType.INFERRED
    return None


def is_visible(classification: RelationType | None, show_inferred_nodes: bool) -> bool:
    """Defined relations are always shown, inferred ones only when enabled."""
    return (classification is not None and show_inferred_nodes) or (
        classification == RelationType.DEFINED
    )
