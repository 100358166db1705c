"""Graph display settings handed explicitly to every page."""

from pydantic import BaseModel


class GraphSettings(BaseModel):
    """Controls which neighbours page queries return.

    Attributes:
        show_virtual_nodes: Include neighbours that have no backing file
        show_attachments: Include neighbours backed by non-markdown files
        show_inferred_nodes: Include neighbours whose relation is only inferred
        index_page_path: Path of the graph's own index page, never linked to
    """

    show_virtual_nodes: bool = True
    show_attachments: bool = True
    show_inferred_nodes: bool = True
    index_page_path: str = "notegraph.md"
