"""Applying link facts to the pages of the graph."""

from notegraph.domain.relations import RelationType
from notegraph.domain.relationships import LinkFact
from notegraph.registry import PageRegistry


class RelationshipGraphBuilder:
    """Adds the edges of link facts to pages, in both directions.

    A defined edge on the source page is mirrored by an inferred edge on the
    target page. Plain links are inferred on both sides.
    """

    def __init__(self, *, infer_all_links_as_friends: bool = False):
        self.infer_all_links_as_friends = infer_all_links_as_friends

    def apply_facts(self, registry: PageRegistry, facts: list[LinkFact]) -> None:
        for fact in facts:
            self.apply_fact(registry, fact)

    def apply_fact(self, registry: PageRegistry, fact: LinkFact) -> None:
        """Add the edges for a single fact, creating virtual pages as needed.

        Args:
            registry: Registry owning the pages
            fact: Link fact to apply
        """
        source = registry.get_or_create_page(fact.source)
        target = registry.get_or_create_page(fact.target)
        definition = fact.definition

        if fact.kind == "parent":
            source.add_parent(target, RelationType.DEFINED, definition)
            target.add_child(source, RelationType.INFERRED, definition)
        elif fact.kind == "child":
            source.add_child(target, RelationType.DEFINED, definition)
            target.add_parent(source, RelationType.INFERRED, definition)
        elif fact.kind == "friend":
            source.add_friend(target, RelationType.DEFINED, definition)
            target.add_friend(source, RelationType.INFERRED, definition)
        elif self.infer_all_links_as_friends:
            source.add_friend(target, RelationType.INFERRED)
            target.add_friend(source, RelationType.INFERRED)
        else:
            source.add_child(target, RelationType.INFERRED)
            target.add_parent(source, RelationType.INFERRED)
