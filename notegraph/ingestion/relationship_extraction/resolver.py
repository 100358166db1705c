"""Resolution of wikilink text to page paths."""

import posixpath
from collections.abc import Iterable
from pathlib import PurePosixPath

from loguru import logger


class LinkResolver:
    """Resolve link text to a vault path with clear precedence rules.

    Links that match no file resolve to a path of their own, which becomes a
    virtual page.
    """

    def __init__(self, paths: Iterable[str] = ()):
        """Initialize resolver with the known vault paths.

        Args:
            paths: Paths of all files in the vault, relative and with forward slashes
        """
        self._paths: set[str] = set()
        for path in paths:
            self.add_path(path)

    def add_path(self, path: str) -> None:
        self._paths.add(path)

    def remove_path(self, path: str) -> None:
        self._paths.discard(path)

    def resolve(self, link: str, source_path: str) -> str:
        """Resolve a single link found in the note at source_path.

        Priority:
        1. Exact vault path
        2. Path relative to the linking note
        3. Unique-enough file name or stem match (shortest path wins)
        4. The link itself as a virtual markdown page

        Args:
            link: Link target as written in the note
            source_path: Path of the note containing the link

        Returns:
            Resolved page path
        """
        clean_link = link.strip().lstrip("/")

        resolution_strategies = [
            ("exact path", self._resolve_exact),
            ("relative to note", self._resolve_relative_to_note),
            ("by file name", self._resolve_by_name),
        ]

        for strategy_name, resolver_func in resolution_strategies:
            candidate = resolver_func(clean_link, source_path)
            if candidate:
                logger.debug(f"Resolved {link} {strategy_name}: {candidate}")
                return candidate

        suffix = PurePosixPath(clean_link).suffix
        has_extension = bool(suffix) and " " not in suffix
        virtual_path = clean_link if has_extension else f"{clean_link}.md"
        logger.debug(f"Could not resolve link {link} from {source_path}, using {virtual_path}")
        return virtual_path

    def _match(self, path: str) -> str | None:
        for candidate in (path, f"{path}.md"):
            if candidate in self._paths:
                return candidate
        return None

    def _resolve_exact(self, link: str, source_path: str) -> str | None:
        return self._match(link)

    def _resolve_relative_to_note(self, link: str, source_path: str) -> str | None:
        folder = posixpath.dirname(source_path)
        if not folder:
            return None
        return self._match(posixpath.normpath(posixpath.join(folder, link)))

    def _resolve_by_name(self, link: str, source_path: str) -> str | None:
        name = link.lower()
        candidates = [
            path
            for path in self._paths
            if PurePosixPath(path).name.lower() == name
            or (path.lower().endswith(".md") and PurePosixPath(path).stem.lower() == name)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda path: (path.count("/"), len(path), path))
