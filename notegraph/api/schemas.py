"""Response models of the graph API."""

from typing import Literal

from pydantic import BaseModel

from notegraph.domain.page import Page
from notegraph.domain.relations import Neighbour, RelationType


class PageSummary(BaseModel):
    path: str
    name: str
    is_virtual: bool
    is_attachment: bool
    mtime: float | None = None

    @classmethod
    def from_page(cls, page: Page) -> "PageSummary":
        return cls(
            path=page.path,
            name=page.name,
            is_virtual=page.is_virtual,
            is_attachment=page.is_attachment,
            mtime=page.mtime,
        )


class NeighbourOut(BaseModel):
    page: PageSummary
    relation_type: RelationType | None = None
    type_definition: str | None = None

    @classmethod
    def from_neighbour(cls, neighbour: Neighbour) -> "NeighbourOut":
        return cls(
            page=PageSummary.from_page(neighbour.page),
            relation_type=neighbour.relation_type,
            type_definition=neighbour.type_definition,
        )


class Neighbourhood(BaseModel):
    """Resolved neighbours of one page, per relation kind."""

    page: PageSummary
    parents: list[NeighbourOut] = []
    children: list[NeighbourOut] = []
    friends: list[NeighbourOut] = []
    siblings: list[NeighbourOut] = []

    @classmethod
    def from_page(cls, page: Page) -> "Neighbourhood":
        return cls(
            page=PageSummary.from_page(page),
            parents=[NeighbourOut.from_neighbour(n) for n in page.get_parents()],
            children=[NeighbourOut.from_neighbour(n) for n in page.get_children()],
            friends=[NeighbourOut.from_neighbour(n) for n in page.get_friends()],
            siblings=[NeighbourOut.from_neighbour(n) for n in page.get_siblings()],
        )


class FieldSuggestions(BaseModel):
    kind: Literal["all", "parent", "child", "friend"]
    query: str
    suggestions: list[str] = []
    completions: list[str] = []
