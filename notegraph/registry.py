"""Registry of all pages in the graph, keyed by path."""

from notegraph.domain.page import Page, PageFile
from notegraph.domain.settings import GraphSettings
from notegraph.errors import PageNotFoundError


class PageRegistry:
    """Owns page identity. Pages are created on first reference and shared by all relations."""

    def __init__(self, settings: GraphSettings):
        self.settings = settings
        self._pages: dict[str, Page] = {}

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, path: object) -> bool:
        return path in self._pages

    @property
    def pages(self) -> list[Page]:
        return list(self._pages.values())

    def get_or_create_page(self, path: str, file: PageFile | None = None) -> Page:
        """Return the page at path, creating it (virtual when file is None) if needed.

        An existing virtual page is materialized when a file is given.
        """
        page = self._pages.get(path)
        if page is None:
            page = Page(path, file, self.settings)
            self._pages[path] = page
        elif file is not None:
            page.set_file(file)
        return page

    def get_page(self, path: str) -> Page:
        try:
            return self._pages[path]
        except KeyError as err:
            raise PageNotFoundError(path) from err

    def find_page(self, path: str) -> Page | None:
        return self._pages.get(path)

    def remove_page(self, path: str) -> None:
        self._pages.pop(path, None)

    def edge_count(self) -> int:
        return sum(len(page.neighbours) for page in self._pages.values())

    def search(self, query: str, limit: int = 20) -> list[Page]:
        """Find pages whose path or name contains the query.

        Args:
            query: Case-insensitive text to look for
            limit: Maximum number of pages to return

        Returns:
            Matching pages, names starting with the query first, then alphabetical
        """
        needle = query.strip().lower()
        if not needle:
            return []

        matches = [
            page
            for page in self._pages.values()
            if needle in page.path.lower() or needle in page.name.lower()
        ]
        matches.sort(key=lambda page: (not page.name.lower().startswith(needle), page.path.lower()))
        return matches[:limit]
