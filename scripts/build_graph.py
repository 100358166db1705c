"""CLI for indexing a notes folder and printing the relationship graph of a page"""

import argparse
import logging
from pathlib import Path

from notegraph.config import settings
from notegraph.domain.page import Page
from notegraph.ingestion.orchestrator import GraphIndexer
from notegraph.registry import PageRegistry


def format_neighbourhood(page: Page) -> str:
    sections = [
        ("Parents", page.get_parents()),
        ("Children", page.get_children()),
        ("Friends", page.get_friends()),
        ("Siblings", page.get_siblings()),
    ]
    lines = [page.path]
    for title, neighbours in sections:
        lines.append(f"  {title}:")
        for neighbour in neighbours:
            relation_type = neighbour.relation_type.value if neighbour.relation_type else "-"
            definition = f" ({neighbour.type_definition})" if neighbour.type_definition else ""
            lines.append(f"    - {neighbour.page.path} [{relation_type}]{definition}")
    return "\n".join(lines)


def main(in_folder: str, page_path: str | None, hide_inferred: bool) -> None:
    graph_settings = settings.graph_settings()
    if hide_inferred:
        graph_settings.show_inferred_nodes = False

    registry = PageRegistry(graph_settings)
    indexer = GraphIndexer(
        registry=registry,
        hierarchy=settings.hierarchy(),
        attachment_extensions=settings.attachment_extensions,
        infer_all_links_as_friends=settings.infer_all_links_as_friends,
    )
    indexer.index_folder(Path(in_folder))

    if page_path is None:
        print(f"Pages: {len(registry)}")
        print(f"Edges: {registry.edge_count()}")
        return

    page = registry.find_page(page_path)
    if page is None:
        raise SystemExit(f"Page not found: {page_path}")
    print(format_neighbourhood(page))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--in-folder",
        type=str,
        required=False,
        help="Folder containing markdown files",
        default=str(settings.notes_folder),
    )
    parser.add_argument(
        "--page", type=str, required=False, help="Vault path of the page to print", default=None
    )
    parser.add_argument(
        "--hide-inferred", action="store_true", help="Only show explicitly defined relations"
    )

    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level)

    main(
        in_folder=args.in_folder,
        page_path=args.page,
        hide_inferred=args.hide_inferred,
    )
