"""Orchestration service for building and maintaining the page graph of a vault."""

import logging
from pathlib import Path

from notegraph.domain.page import PageFile
from notegraph.domain.relationships import HierarchyDefinition, LinkFact
from notegraph.registry import PageRegistry

from .relationship_extraction import LinkFactBuilder, LinkResolver, RelationshipGraphBuilder

logger = logging.getLogger(__name__)

DEFAULT_ATTACHMENT_EXTENSIONS = ["png", "jpg", "jpeg", "gif", "svg", "webp", "pdf", "excalidraw"]


class GraphIndexer:
    """Indexes a vault folder into a page registry and keeps it current.

    Every markdown note contributes a list of link facts. The facts are kept
    per source note so that a rescan can unlink exactly the edges the note
    produced before adding the current ones.
    """

    def __init__(
        self,
        *,
        registry: PageRegistry,
        hierarchy: HierarchyDefinition | None = None,
        attachment_extensions: list[str] | None = None,
        infer_all_links_as_friends: bool = False,
    ):
        """Initialize the indexer.

        Args:
            registry: Registry the pages are created in
            hierarchy: Field names for parent, child and friend relations
            attachment_extensions: Extensions of files indexed as attachment pages
            infer_all_links_as_friends: Treat plain links as inferred friendships
        """
        self.registry = registry
        self.hierarchy = hierarchy or HierarchyDefinition()
        self.attachment_extensions = {
            ext.lower().lstrip(".")
            for ext in (attachment_extensions or DEFAULT_ATTACHMENT_EXTENSIONS)
        }

        self.resolver = LinkResolver()
        self.fact_builder = LinkFactBuilder(
            hierarchy=self.hierarchy,
            resolver=self.resolver,
            index_page_path=registry.settings.index_page_path,
        )
        self.graph_builder = RelationshipGraphBuilder(
            infer_all_links_as_friends=infer_all_links_as_friends
        )
        self.folder: Path | None = None
        self._facts: dict[str, list[LinkFact]] = {}

    def index_folder(self, folder: Path) -> None:
        """Index every note and attachment in the folder.

        Args:
            folder: Path to the vault folder
        """
        self.folder = folder
        markdown_files = self._get_markdown_files(folder)
        attachment_files = self._get_attachment_files(folder)

        for file in markdown_files + attachment_files:
            page_file = PageFile.from_file(file, folder)
            self.resolver.add_path(page_file.path)
            self.registry.get_or_create_page(page_file.path, page_file)

        for file in markdown_files:
            path = file.relative_to(folder).as_posix()
            facts = self._build_facts(file, path)
            self._facts[path] = facts
            self.graph_builder.apply_facts(self.registry, facts)

        logger.info("Indexing complete:")
        logger.info(f"  - Notes: {len(markdown_files)}")
        logger.info(f"  - Attachments: {len(attachment_files)}")
        logger.info(f"  - Pages: {len(self.registry)}")
        logger.info(f"  - Edges: {self.registry.edge_count()}")

    def reindex_file(self, file: Path) -> None:
        """Rescan a created or modified file.

        Stale edges of the note are unlinked before the current ones are added.

        Args:
            file: Absolute path of the file inside the indexed folder
        """
        folder = self._require_folder()
        page_file = PageFile.from_file(file, folder)
        path = page_file.path
        if path == self.registry.settings.index_page_path:
            return

        self.resolver.add_path(path)
        page = self.registry.get_or_create_page(path, page_file)

        self._unlink_facts(path, self._facts.pop(path, []))
        if not page.is_markdown:
            return

        facts = self._build_facts(file, path)
        self._facts[path] = facts
        self.graph_builder.apply_facts(self.registry, facts)
        logger.debug(f"Reindexed {path} with {len(facts)} links")

    def remove_file(self, file: Path) -> None:
        """Drop a deleted file from the graph.

        The page stays as a virtual page while other notes still link to it.

        Args:
            file: Absolute path the file had inside the indexed folder
        """
        folder = self._require_folder()
        path = file.relative_to(folder).as_posix()

        self._unlink_facts(path, self._facts.pop(path, []))
        self.resolver.remove_path(path)

        page = self.registry.find_page(path)
        if page is None:
            return
        if page.neighbours:
            page.set_file(None)
        else:
            self.registry.remove_page(path)
        logger.debug(f"Removed {path}")

    def _unlink_facts(self, source: str, facts: list[LinkFact]) -> None:
        """Unlink the page pairs touched by a note's facts.

        Facts the other page contributed about the same pair are replayed, and
        virtual pages left without neighbours are dropped.
        """
        source_page = self.registry.find_page(source)
        for target in dict.fromkeys(fact.target for fact in facts):
            target_page = self.registry.find_page(target)
            if source_page is not None:
                source_page.unlink_neighbour(target)
            if target_page is None:
                continue
            target_page.unlink_neighbour(source)

            replay = [fact for fact in self._facts.get(target, []) if fact.target == source]
            self.graph_builder.apply_facts(self.registry, replay)

            if target_page.is_virtual and not target_page.neighbours:
                self.registry.remove_page(target)

    def _build_facts(self, file: Path, path: str) -> list[LinkFact]:
        try:
            content = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {file}: {e}")
            return []
        return self.fact_builder.build_facts(path, content)

    def _get_markdown_files(self, folder: Path) -> list[Path]:
        index_page_path = self.registry.settings.index_page_path
        return sorted(
            file
            for file in folder.rglob("*.md")
            if file.is_file() and file.relative_to(folder).as_posix() != index_page_path
        )

    def _get_attachment_files(self, folder: Path) -> list[Path]:
        return sorted(
            file
            for file in folder.rglob("*")
            if file.is_file() and file.suffix.lower().lstrip(".") in self.attachment_extensions
        )

    def _require_folder(self) -> Path:
        if self.folder is None:
            raise RuntimeError("index_folder must be called before incremental updates")
        return self.folder
