"""Page domain model: a node of the relationship graph and its neighbours."""

from pathlib import Path, PurePosixPath

from pydantic import BaseModel

from notegraph.domain.classifier import (
    Classifier,
    classify_child,
    classify_friend,
    classify_parent,
    is_visible,
)
from notegraph.domain.relations import (
    Axis,
    Neighbour,
    Relation,
    RelationToPage,
    RelationType,
    upsert_relation,
)
from notegraph.domain.settings import GraphSettings


class PageFile(BaseModel):
    """Backing file of a page.

    Attributes:
        path: Path relative to the vault root, with forward slashes
        extension: Lowercase file extension without the dot
        mtime: File modification timestamp (seconds since epoch)
    """

    path: str
    extension: str
    mtime: float

    @classmethod
    def from_file(cls, file: Path, folder: Path) -> "PageFile":
        return cls(
            path=file.relative_to(folder).as_posix(),
            extension=file.suffix.lstrip(".").lower(),
            mtime=file.stat().st_mtime,
        )


class Page:
    """A node in the relationship graph.

    A page without a backing file is virtual: it is referenced by another
    page but does not exist yet. Relations are stored per neighbour path and
    classified on every query, nothing is cached.
    """

    def __init__(self, path: str, file: PageFile | None, settings: GraphSettings):
        self.path = path
        self.file = file
        self.mtime = file.mtime if file else None
        self.neighbours: dict[str, Relation] = {}
        self.settings = settings

    def __repr__(self) -> str:
        return f"Page(path={self.path!r})"

    @property
    def name(self) -> str:
        """Basename without the markdown extension."""
        name = PurePosixPath(self.path).name
        return name[: -len(".md")] if name.lower().endswith(".md") else name

    @property
    def is_virtual(self) -> bool:
        return self.file is None

    @property
    def is_attachment(self) -> bool:
        return self.file.extension != "md" if self.file else False

    @property
    def is_markdown(self) -> bool:
        # files that have not been created are assumed to be markdown
        return self.file is None or self.file.extension == "md"

    def set_file(self, file: PageFile | None) -> None:
        """Attach or detach the backing file."""
        self.file = file
        self.mtime = file.mtime if file else None

    # add relationships

    def add_parent(
        self, page: "Page", relation_type: RelationType, definition: str | None = None
    ) -> None:
        self._add_relation(page, "parent", relation_type, definition)

    def add_child(
        self, page: "Page", relation_type: RelationType, definition: str | None = None
    ) -> None:
        self._add_relation(page, "child", relation_type, definition)

    def add_friend(
        self, page: "Page", relation_type: RelationType, definition: str | None = None
    ) -> None:
        self._add_relation(page, "friend", relation_type, definition)

    def unlink_neighbour(self, path: str) -> None:
        self.neighbours.pop(path, None)

    def _add_relation(
        self, page: "Page", axis: Axis, relation_type: RelationType, definition: str | None
    ) -> None:
        if page.path == self.settings.index_page_path:
            return
        self.neighbours[page.path] = upsert_relation(
            self.neighbours.get(page.path), page, axis, relation_type, definition
        )

    # queries

    def _get_neighbours(self) -> list[Relation]:
        """Stored relations, minus virtual and attachment neighbours when hidden."""
        show_virtual = self.settings.show_virtual_nodes
        show_attachments = self.settings.show_attachments
        return [
            relation
            for relation in self.neighbours.values()
            if (show_virtual or not relation.target.is_virtual)
            and (show_attachments or not relation.target.is_attachment)
        ]

    def _visible(self, classify: Classifier) -> list[Relation]:
        return [
            relation
            for relation in self._get_neighbours()
            if is_visible(classify(relation), self.settings.show_inferred_nodes)
        ]

    def has_children(self) -> bool:
        return bool(self._visible(classify_child))

    def get_children(self) -> list[Neighbour]:
        return [
            Neighbour(
                page=relation.target,
                relation_type=relation.child_type,
                type_definition=relation.child_type_definition,
            )
            for relation in self._visible(classify_child)
        ]

    def has_parents(self) -> bool:
        return bool(self._visible(classify_parent))

    def get_parents(self) -> list[Neighbour]:
        return [
            Neighbour(
                page=relation.target,
                relation_type=relation.parent_type,
                type_definition=relation.parent_type_definition,
            )
            for relation in self._visible(classify_parent)
        ]

    def has_friends(self) -> bool:
        return bool(self._visible(classify_friend))

    def get_friends(self) -> list[Neighbour]:
        neighbours = []
        for relation in self._visible(classify_friend):
            relation_type = relation.friend_type
            if relation_type is None:
                # friendship derived from parent/child symmetry
                both_defined = (
                    relation.parent_type == RelationType.DEFINED
                    and relation.child_type == RelationType.DEFINED
                )
                relation_type = RelationType.DEFINED if both_defined else RelationType.INFERRED
            neighbours.append(
                Neighbour(
                    page=relation.target,
                    relation_type=relation_type,
                    type_definition=relation.friend_type_definition,
                )
            )
        return neighbours

    def get_relation_to_page(self, other: "Page") -> RelationToPage | None:
        """Label the stored relation to another page, child first, then parent.

        Anything that is neither a child nor a parent is reported as a friend,
        even when no friend signal was ever recorded.
        """
        relation = self.neighbours.get(other.path)
        if relation is None:
            return None
        if classify_child(relation):
            return RelationToPage(
                type="child",
                relation_type=relation.child_type,
                type_definition=relation.child_type_definition,
            )
        if classify_parent(relation):
            return RelationToPage(
                type="parent",
                relation_type=relation.parent_type,
                type_definition=relation.parent_type_definition,
            )
        return RelationToPage(
            type="friend",
            relation_type=relation.friend_type,
            type_definition=relation.friend_type_definition,
        )

    def get_siblings(self) -> list[Neighbour]:
        """Other children of this page's parents, in discovery order."""
        siblings: dict[str, Neighbour] = {}
        for parent in self.get_parents():
            for sibling in parent.page.get_children():
                path = sibling.page.path
                if path == self.path:
                    continue
                if path in siblings:
                    if sibling.relation_type == RelationType.DEFINED:
                        siblings[path].relation_type = RelationType.DEFINED
                    continue
                siblings[path] = sibling
        return list(siblings.values())


Relation.model_rebuild()
Neighbour.model_rebuild()
