from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from notegraph.domain.relationships import HierarchyDefinition
from notegraph.domain.settings import GraphSettings
from notegraph.ontology import FieldTriggers


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Basic auth settings
    auth_username: str
    auth_password: str

    # Vault settings
    notes_folder: Path = Path("data/notes")
    attachment_extensions: list[str] = [
        "png",
        "jpg",
        "jpeg",
        "gif",
        "svg",
        "webp",
        "pdf",
        "excalidraw",
    ]

    # Graph settings
    show_virtual_nodes: bool = True
    show_attachments: bool = True
    show_inferred_nodes: bool = True
    index_page_path: str = "notegraph.md"
    infer_all_links_as_friends: bool = False

    # Hierarchy field names
    parent_fields: list[str] = HierarchyDefinition().parents
    child_fields: list[str] = HierarchyDefinition().children
    friend_fields: list[str] = HierarchyDefinition().friends

    # Field suggestion triggers
    field_trigger: str = ":::"
    parent_field_trigger: str = "::p"
    child_field_trigger: str = "::c"
    friend_field_trigger: str = "::f"

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    def graph_settings(self) -> GraphSettings:
        return GraphSettings(
            show_virtual_nodes=self.show_virtual_nodes,
            show_attachments=self.show_attachments,
            show_inferred_nodes=self.show_inferred_nodes,
            index_page_path=self.index_page_path,
        )

    def hierarchy(self) -> HierarchyDefinition:
        return HierarchyDefinition(
            parents=self.parent_fields,
            children=self.child_fields,
            friends=self.friend_fields,
        )

    def field_triggers(self) -> FieldTriggers:
        return FieldTriggers(
            all=self.field_trigger,
            parent=self.parent_field_trigger,
            child=self.child_field_trigger,
            friend=self.friend_field_trigger,
        )


settings = Settings()  # type: ignore
