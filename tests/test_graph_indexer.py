"""Tests for indexing a vault and keeping the graph current."""

from pathlib import Path

import pytest

from notegraph.domain import GraphSettings, HierarchyDefinition, RelationType
from notegraph.ingestion.orchestrator import GraphIndexer
from notegraph.registry import PageRegistry

DEFINED = RelationType.DEFINED
INFERRED = RelationType.INFERRED


def paths(neighbours: list) -> list[str]:
    return [neighbour.page.path for neighbour in neighbours]


@pytest.fixture
def indexer(hierarchy: HierarchyDefinition) -> GraphIndexer:
    return GraphIndexer(registry=PageRegistry(GraphSettings()), hierarchy=hierarchy)


def test_index_folder_creates_pages(indexed_registry: PageRegistry) -> None:
    """Notes and attachments become pages, unresolved links become virtual pages."""
    assert {page.path for page in indexed_registry.pages} == {
        "Compost.md",
        "Home.md",
        "Projects/Garden.md",
        "Projects/Kitchen.md",
        "plan.png",
        "Attic.md",
    }
    assert indexed_registry.get_page("Attic.md").is_virtual
    assert indexed_registry.get_page("plan.png").is_attachment
    assert indexed_registry.get_page("Home.md").mtime > 0


def test_index_folder_relations(indexed_registry: PageRegistry) -> None:
    home = indexed_registry.get_page("Home.md")
    garden = indexed_registry.get_page("Projects/Garden.md")
    kitchen = indexed_registry.get_page("Projects/Kitchen.md")

    children = home.get_children()
    assert paths(children) == ["Projects/Garden.md", "Attic.md", "Projects/Kitchen.md"]
    assert [child.relation_type for child in children] == [DEFINED, DEFINED, INFERRED]
    assert children[0].type_definition == "Child, Parent"

    assert paths(garden.get_parents()) == ["Home.md"]
    assert garden.get_parents()[0].relation_type == DEFINED
    assert paths(garden.get_children()) == ["Compost.md", "plan.png"]
    assert paths(garden.get_friends()) == ["Projects/Kitchen.md"]
    assert paths(garden.get_siblings()) == ["Attic.md", "Projects/Kitchen.md"]

    assert paths(kitchen.get_parents()) == ["Home.md"]
    assert kitchen.get_parents()[0].type_definition == "up"
    assert paths(kitchen.get_friends()) == ["Projects/Garden.md"]
    assert kitchen.get_friends()[0].relation_type == DEFINED


def test_index_folder_respects_display_settings(
    vault: Path, hierarchy: HierarchyDefinition
) -> None:
    settings = GraphSettings(show_inferred_nodes=False, show_attachments=False)
    registry = PageRegistry(settings)
    GraphIndexer(registry=registry, hierarchy=hierarchy).index_folder(vault)

    home = registry.get_page("Home.md")
    garden = registry.get_page("Projects/Garden.md")
    assert paths(home.get_children()) == ["Projects/Garden.md", "Attic.md"]
    assert garden.get_children() == []

    settings.show_virtual_nodes = False
    assert paths(home.get_children()) == ["Projects/Garden.md"]


def test_index_folder_links_as_friends(vault: Path, hierarchy: HierarchyDefinition) -> None:
    registry = PageRegistry(GraphSettings())
    GraphIndexer(
        registry=registry, hierarchy=hierarchy, infer_all_links_as_friends=True
    ).index_folder(vault)

    garden = registry.get_page("Projects/Garden.md")
    assert garden.get_children() == []
    assert paths(garden.get_friends()) == ["Compost.md", "plan.png", "Projects/Kitchen.md"]


def test_index_page_is_excluded(notes_directory: Path, indexer: GraphIndexer) -> None:
    (notes_directory / "notegraph.md").write_text("Child:: [[A]]\n")
    (notes_directory / "A.md").write_text("Parent:: [[notegraph]]\nSee [[notegraph]].\n")

    indexer.index_folder(notes_directory)

    assert "notegraph.md" not in indexer.registry
    assert indexer.registry.get_page("A.md").neighbours == {}


def test_reindex_modified_file(vault: Path, hierarchy: HierarchyDefinition) -> None:
    """Stale edges are unlinked, edges defined by other notes survive."""
    registry = PageRegistry(GraphSettings())
    indexer = GraphIndexer(registry=registry, hierarchy=hierarchy)
    indexer.index_folder(vault)

    garden_file = vault / "Projects" / "Garden.md"
    garden_file.write_text("# Garden\nSee [[Attic]].\n")
    indexer.reindex_file(garden_file)

    home = registry.get_page("Home.md")
    garden = registry.get_page("Projects/Garden.md")
    compost = registry.get_page("Compost.md")
    attic = registry.get_page("Attic.md")

    assert paths(garden.get_parents()) == ["Home.md"]
    assert garden.get_parents()[0].relation_type == INFERRED
    assert garden.get_parents()[0].type_definition == "Child"
    home_children = {child.page.path: child for child in home.get_children()}
    assert home_children["Projects/Garden.md"].relation_type == DEFINED
    assert home_children["Projects/Garden.md"].type_definition == "Child"
    assert paths(garden.get_children()) == ["Attic.md"]
    assert paths(garden.get_friends()) == ["Projects/Kitchen.md"]
    assert compost.get_parents() == []
    assert paths(attic.get_parents()) == ["Home.md", "Projects/Garden.md"]


def test_reindex_new_file_materializes_virtual_page(
    vault: Path, hierarchy: HierarchyDefinition
) -> None:
    registry = PageRegistry(GraphSettings())
    indexer = GraphIndexer(registry=registry, hierarchy=hierarchy)
    indexer.index_folder(vault)

    attic_file = vault / "Attic.md"
    attic_file.write_text("Parent:: [[Home]]\n")
    indexer.reindex_file(attic_file)

    attic = registry.get_page("Attic.md")
    assert not attic.is_virtual
    assert paths(attic.get_parents()) == ["Home.md"]
    assert attic.get_parents()[0].relation_type == DEFINED
    assert attic.get_parents()[0].type_definition == "Child, Parent"


def test_remove_file_without_references(vault: Path, hierarchy: HierarchyDefinition) -> None:
    registry = PageRegistry(GraphSettings())
    indexer = GraphIndexer(registry=registry, hierarchy=hierarchy)
    indexer.index_folder(vault)

    kitchen_file = vault / "Projects" / "Kitchen.md"
    kitchen_file.unlink()
    indexer.remove_file(kitchen_file)

    assert "Projects/Kitchen.md" not in registry
    assert paths(registry.get_page("Home.md").get_children()) == [
        "Projects/Garden.md",
        "Attic.md",
    ]
    assert registry.get_page("Projects/Garden.md").get_friends() == []


def test_remove_referenced_file_becomes_virtual(
    vault: Path, hierarchy: HierarchyDefinition
) -> None:
    registry = PageRegistry(GraphSettings())
    indexer = GraphIndexer(registry=registry, hierarchy=hierarchy)
    indexer.index_folder(vault)

    home_file = vault / "Home.md"
    home_file.unlink()
    indexer.remove_file(home_file)

    home = registry.get_page("Home.md")
    garden = registry.get_page("Projects/Garden.md")
    assert home.is_virtual
    assert "Attic.md" not in registry
    assert paths(garden.get_parents()) == ["Home.md"]
    assert garden.get_parents()[0].relation_type == DEFINED
    assert garden.get_parents()[0].type_definition == "Parent"


def test_incremental_update_requires_index(indexer: GraphIndexer, notes_directory: Path) -> None:
    with pytest.raises(RuntimeError):
        indexer.reindex_file(notes_directory / "A.md")
