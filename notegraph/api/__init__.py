from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notegraph.api.endpoints import get_endpoints_router
from notegraph.domain.relationships import HierarchyDefinition
from notegraph.ontology import FieldTriggers
from notegraph.registry import PageRegistry


def create_app(
    *,
    registry: PageRegistry,
    hierarchy: HierarchyDefinition,
    field_triggers: FieldTriggers,
) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        router=get_endpoints_router(
            registry=registry, hierarchy=hierarchy, field_triggers=field_triggers
        )
    )

    return app
