"""Content extraction for markdown notes: wikilinks, frontmatter and inline fields."""

import logging
import re
from typing import Annotated, Any, Literal, Union

import frontmatter
import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# [[target]], [[target#heading]], [[target|alias]] and ![[embed]]
WIKILINK_PATTERN = re.compile(r"\[\[([^#\]|]*)[^\]]*\]\]")
# Dataview style "Field:: value" at the start of a line, optionally in a list item
INLINE_FIELD_PATTERN = re.compile(r"^[ \t]*(?:[-*+][ \t]+)?([^\s:\[\]()][^:\[\]()\n]*?)::[ \t]*(.*)$", re.M)


class LinkValue(BaseModel):
    """A field value that is a single link target."""

    kind: Literal["link"] = "link"
    target: str


class TextValue(BaseModel):
    """A free-text field value that may contain wikilinks."""

    kind: Literal["text"] = "text"
    text: str


class LinkListValue(BaseModel):
    """A field value holding several values."""

    kind: Literal["list"] = "list"
    values: list["FieldValue"] = []


FieldValue = Annotated[Union[LinkValue, TextValue, LinkListValue], Field(discriminator="kind")]

LinkListValue.model_rebuild()


class ContentExtractor:
    """Service for extracting link information from markdown text."""

    @staticmethod
    def extract_wikilinks(content: str) -> list[str]:
        """Extract wikilink targets, without headings or aliases, in order of appearance.

        Args:
            content: Markdown content to extract wikilinks from

        Returns:
            List of unique wikilink targets
        """
        links: list[str] = []
        for match in WIKILINK_PATTERN.finditer(content):
            target = match.group(1).strip()
            if target and target not in links:
                links.append(target)
        return links

    @staticmethod
    def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
        """Split a note into its frontmatter metadata and body.

        Malformed frontmatter is logged and the whole content is treated as body.
        """
        try:
            post = frontmatter.loads(content)
        except yaml.YAMLError as e:
            logger.warning(f"Ignoring malformed frontmatter: {e}")
            return {}, content
        return dict(post.metadata), post.content

    @staticmethod
    def extract_inline_fields(body: str) -> dict[str, list[str]]:
        """Extract dataview style inline fields ("Field:: value") from the note body.

        Returns:
            Mapping of field name to the raw values found for it
        """
        fields: dict[str, list[str]] = {}
        for match in INLINE_FIELD_PATTERN.finditer(body):
            name = match.group(1).strip().strip("*_").strip()
            value = match.group(2).strip()
            if name and value:
                fields.setdefault(name, []).append(value)
        return fields

    @staticmethod
    def to_field_value(raw: Any) -> FieldValue | None:
        """Normalize a raw metadata value into a field value.

        YAML turns an unquoted [[Note]] into a nested one-element list, which
        is read as a single link to that string.
        """
        if raw is None:
            return None
        if isinstance(raw, (list, tuple)):
            values = []
            for item in raw:
                if ContentExtractor._is_yaml_wikilink(item):
                    values.append(LinkValue(target=item[0]))
                    continue
                value = ContentExtractor.to_field_value(item)
                if value is not None:
                    values.append(value)
            return LinkListValue(values=values)
        return TextValue(text=str(raw))

    @staticmethod
    def _is_yaml_wikilink(item: Any) -> bool:
        if not isinstance(item, (list, tuple)) or len(item) != 1:
            return False
        target = item[0]
        return isinstance(target, str) and not (
            target.startswith("[[") and target.endswith("]]")
        )

    @staticmethod
    def links_from_field_value(value: FieldValue) -> list[str]:
        """Collect the unique link targets of a field value."""
        if isinstance(value, LinkValue):
            links = [value.target.strip()]
        elif isinstance(value, TextValue):
            links = ContentExtractor.extract_wikilinks(value.text)
        else:
            links = [
                link
                for item in value.values
                for link in ContentExtractor.links_from_field_value(item)
            ]

        unique: list[str] = []
        for link in links:
            if link and link not in unique:
                unique.append(link)
        return unique

    def extract_fields(self, content: str) -> tuple[dict[str, FieldValue], str]:
        """Read all metadata fields of a note, from frontmatter and inline fields.

        Field names are lowercased. A field present in both places keeps the
        values from both.

        Args:
            content: Full markdown content of the note

        Returns:
            Tuple of (field name to value mapping, note body)
        """
        metadata, body = self.split_frontmatter(content)

        raw_fields: dict[str, list[Any]] = {}
        for name, raw in metadata.items():
            raw_fields.setdefault(str(name).lower(), []).append(raw)
        for name, values in self.extract_inline_fields(body).items():
            raw_fields.setdefault(name.lower(), []).extend(values)

        fields: dict[str, FieldValue] = {}
        for name, raws in raw_fields.items():
            if len(raws) == 1:
                field_value = self.to_field_value(raws[0])
            else:
                # each source is normalized on its own
                values = [self.to_field_value(raw) for raw in raws]
                field_value = LinkListValue(values=[v for v in values if v is not None])
            if field_value is not None:
                fields[name] = field_value
        return fields, body
