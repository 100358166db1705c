"""Relationship graph domain: pages, relations and their classification."""

from notegraph.domain.page import Page, PageFile
from notegraph.domain.relations import Neighbour, Relation, RelationToPage, RelationType
from notegraph.domain.relationships import HierarchyDefinition, LinkFact
from notegraph.domain.settings import GraphSettings

__all__ = [
    "GraphSettings",
    "HierarchyDefinition",
    "LinkFact",
    "Neighbour",
    "Page",
    "PageFile",
    "Relation",
    "RelationToPage",
    "RelationType",
]
