import sys

from loguru import logger

from notegraph.api import create_app
from notegraph.config import settings
from notegraph.ingestion.orchestrator import GraphIndexer
from notegraph.registry import PageRegistry

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Indexing notes in {settings.notes_folder}")
registry = PageRegistry(settings.graph_settings())
indexer = GraphIndexer(
    registry=registry,
    hierarchy=settings.hierarchy(),
    attachment_extensions=settings.attachment_extensions,
    infer_all_links_as_friends=settings.infer_all_links_as_friends,
)
indexer.index_folder(settings.notes_folder)
logger.info(f"Graph ready with {len(registry)} pages")

app = create_app(
    registry=registry,
    hierarchy=settings.hierarchy(),
    field_triggers=settings.field_triggers(),
)
