import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

os.environ.setdefault("AUTH_USERNAME", "admin")
os.environ.setdefault("AUTH_PASSWORD", "password")

from fastapi.testclient import TestClient  # noqa: E402

from notegraph.api import create_app  # noqa: E402
from notegraph.domain import GraphSettings, HierarchyDefinition  # noqa: E402
from notegraph.ingestion.orchestrator import GraphIndexer  # noqa: E402
from notegraph.ontology import FieldTriggers  # noqa: E402
from notegraph.registry import PageRegistry  # noqa: E402


@pytest.fixture
def graph_settings() -> GraphSettings:
    return GraphSettings()


@pytest.fixture
def registry(graph_settings: GraphSettings) -> PageRegistry:
    return PageRegistry(graph_settings)


@pytest.fixture
def hierarchy() -> HierarchyDefinition:
    return HierarchyDefinition(
        parents=["Parent", "up"],
        children=["Child", "down"],
        friends=["Friend"],
    )


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Override settings for testing."""
    monkeypatch.setattr("notegraph.config.settings.auth_username", "admin")
    monkeypatch.setattr("notegraph.config.settings.auth_password", "password")


@pytest.fixture
def temp_notes_base() -> Generator[Path, None, None]:
    """Create a temporary directory used when testing the indexing of notes."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def notes_directory(temp_notes_base: Path) -> Path:
    """Create notes subdirectory."""
    notes_dir = temp_notes_base / "notes"
    notes_dir.mkdir()
    return notes_dir


@pytest.fixture
def vault(notes_directory: Path) -> Path:
    """A small vault with hierarchy fields, plain links and an attachment."""
    (notes_directory / "Projects").mkdir()
    (notes_directory / "Projects" / "Garden.md").write_text(
        "---\nParent: '[[Home]]'\n---\n# Garden\nSee [[Compost]] and ![[plan.png]].\n"
    )
    (notes_directory / "Projects" / "Kitchen.md").write_text(
        "# Kitchen\nup:: [[Home]]\nFriend:: [[Garden]]\n"
    )
    (notes_directory / "Home.md").write_text("# Home\nChild:: [[Garden]], [[Attic]]\n")
    (notes_directory / "Compost.md").write_text("# Compost\nNo links here.\n")
    (notes_directory / "plan.png").write_bytes(b"fake image data")
    return notes_directory


@pytest.fixture
def indexed_registry(vault: Path, graph_settings: GraphSettings, hierarchy: HierarchyDefinition):
    registry = PageRegistry(graph_settings)
    GraphIndexer(registry=registry, hierarchy=hierarchy).index_folder(vault)
    return registry


@pytest.fixture
def test_client(indexed_registry: PageRegistry, hierarchy: HierarchyDefinition) -> TestClient:
    """Create test client over the indexed test vault."""
    app = create_app(
        registry=indexed_registry,
        hierarchy=hierarchy,
        field_triggers=FieldTriggers(),
    )
    client = TestClient(app)
    client.auth = ("admin", "password")
    return client
