from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from notegraph.api.auth import verify_credentials
from notegraph.api.schemas import FieldSuggestions, Neighbourhood, PageSummary
from notegraph.domain.relations import RelationToPage
from notegraph.domain.relationships import HierarchyDefinition
from notegraph.errors import PageNotFoundError
from notegraph.ontology import (
    FieldKind,
    FieldTriggers,
    detect_field_trigger,
    format_field,
    suggest_fields,
)
from notegraph.registry import PageRegistry


def _create_pages_search_endpoint(registry: PageRegistry):
    """Create the page search endpoint handler."""

    async def search_pages(
        query: str,
        limit: int = 20,
        _: str = Depends(verify_credentials),
    ) -> list[PageSummary]:
        try:
            return [PageSummary.from_page(page) for page in registry.search(query, limit)]
        except Exception as e:
            logger.error(f"Error searching pages for '{query}': {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

    return search_pages


def _create_neighbours_endpoint(registry: PageRegistry):
    """Create the page neighbourhood endpoint handler."""

    async def get_neighbours(
        path: str,
        _: str = Depends(verify_credentials),
    ) -> Neighbourhood:
        try:
            page = registry.get_page(path)
        except PageNotFoundError as err:
            logger.warning(f"Page not found: {path}")
            raise HTTPException(status_code=404, detail="Page not found") from err

        try:
            return Neighbourhood.from_page(page)
        except Exception as e:
            logger.error(f"Error resolving neighbours of {path}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

    return get_neighbours


def _create_relation_endpoint(registry: PageRegistry):
    """Create the relation between two pages endpoint handler."""

    async def get_relation(
        path: str,
        other: str,
        _: str = Depends(verify_credentials),
    ) -> RelationToPage | None:
        try:
            page = registry.get_page(path)
            other_page = registry.get_page(other)
        except PageNotFoundError as err:
            logger.warning(f"Page not found: {err.path}")
            raise HTTPException(status_code=404, detail="Page not found") from err

        return page.get_relation_to_page(other_page)

    return get_relation


def _create_field_suggestion_endpoint(hierarchy: HierarchyDefinition, triggers: FieldTriggers):
    """Create the hierarchy field name suggestion endpoint handler."""

    async def suggest(
        query: str = "",
        kind: FieldKind = "all",
        line: str | None = None,
        _: str = Depends(verify_credentials),
    ) -> FieldSuggestions:
        if line is not None:
            trigger = detect_field_trigger(line, triggers)
            if trigger is None:
                return FieldSuggestions(kind=kind, query=query, suggestions=[])
            kind, query = trigger

        suggestions = suggest_fields(hierarchy, query, kind)
        return FieldSuggestions(
            kind=kind,
            query=query,
            suggestions=suggestions,
            completions=[format_field(name) for name in suggestions],
        )

    return suggest


def get_endpoints_router(
    *,
    registry: PageRegistry,
    hierarchy: HierarchyDefinition,
    field_triggers: FieldTriggers,
) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    router.get("/api/pages/search")(_create_pages_search_endpoint(registry))
    router.get("/api/pages/neighbours")(_create_neighbours_endpoint(registry))
    router.get("/api/pages/relation")(_create_relation_endpoint(registry))
    router.get("/api/fields/suggest")(_create_field_suggestion_endpoint(hierarchy, field_triggers))

    return router
