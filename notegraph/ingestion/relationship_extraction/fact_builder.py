"""Turning note content into normalized link facts."""

from notegraph.domain.relationships import HierarchyDefinition, LinkFact

from ..content_extractor import ContentExtractor
from .resolver import LinkResolver


class LinkFactBuilder:
    """Builds the link facts a single note contributes to the graph."""

    def __init__(
        self,
        *,
        hierarchy: HierarchyDefinition,
        resolver: LinkResolver,
        index_page_path: str,
    ):
        self.hierarchy = hierarchy
        self.resolver = resolver
        self.index_page_path = index_page_path
        self.content_extractor = ContentExtractor()

    def build_facts(self, source_path: str, content: str) -> list[LinkFact]:
        """Build link facts for a note.

        Hierarchy fields produce parent/child/friend facts named after the
        configured field. Remaining wikilinks produce plain "link" facts,
        except for targets already covered by a hierarchy field.

        Args:
            source_path: Vault path of the note
            content: Full markdown content of the note

        Returns:
            List of facts, without self links or links to the index page
        """
        fields, body = self.content_extractor.extract_fields(content)

        facts: list[LinkFact] = []
        field_kinds = (
            ("parent", self.hierarchy.parents),
            ("child", self.hierarchy.children),
            ("friend", self.hierarchy.friends),
        )
        for kind, field_names in field_kinds:
            processed: set[str] = set()
            for field_name in field_names:
                key = field_name.lower()
                if key in processed or key not in fields:
                    continue
                processed.add(key)
                for link in self.content_extractor.links_from_field_value(fields[key]):
                    facts.append(
                        LinkFact(
                            source=source_path,
                            target=self.resolver.resolve(link, source_path),
                            kind=kind,
                            definition=field_name,
                        )
                    )

        field_targets = {fact.target for fact in facts}
        for link in self.content_extractor.extract_wikilinks(body):
            target = self.resolver.resolve(link, source_path)
            if target in field_targets:
                continue
            field_targets.add(target)
            facts.append(LinkFact(source=source_path, target=target, kind="link"))

        return [
            fact for fact in facts if fact.target not in (source_path, self.index_page_path)
        ]
