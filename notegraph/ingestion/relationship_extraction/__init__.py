"""Relationship extraction module for turning note links into graph edges."""

from notegraph.ingestion.relationship_extraction.fact_builder import LinkFactBuilder
from notegraph.ingestion.relationship_extraction.graph_builder import RelationshipGraphBuilder
from notegraph.ingestion.relationship_extraction.resolver import LinkResolver

__all__ = [
    "LinkFactBuilder",
    "LinkResolver",
    "RelationshipGraphBuilder",
]
