from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class RichText(BaseModel):
    """A single rich text fragment. Only the plain text is used here."""
    model_config = ConfigDict(extra="allow")

    plain_text: str = ""
    type: Optional[str] = None


def join_plain_text(fragments: List[RichText]) -> str:
    return "".join(fragment.plain_text for fragment in fragments)


class Page(BaseModel):
    """A Notion page (database row). Properties are kept as raw dicts keyed by name."""
    model_config = ConfigDict(extra="allow")

    id: str
    object: str = "page"
    properties: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def title(self, property_name: str) -> Optional[str]:
        prop = self.properties.get(property_name)
        if not prop or prop.get("type", "title") != "title":
            return None
        fragments = [RichText.model_validate(item) for item in prop.get("title", [])]
        return join_plain_text(fragments)

    def relation_property(self, property_name: str) -> Optional[Dict[str, Any]]:
        prop = self.properties.get(property_name)
        if prop is None or "relation" not in prop:
            return None
        return prop

    def relation_ids(self, property_name: str) -> List[str]:
        prop = self.relation_property(property_name) or {}
        return [item["id"] for item in prop.get("relation", []) if item.get("id")]


class Database(BaseModel):
    """A Notion database descriptor as returned by GET /databases/{id}."""
    model_config = ConfigDict(extra="allow")

    id: str
    object: str = "database"
    title: List[RichText] = Field(default_factory=list)

    @property
    def plain_title(self) -> str:
        return join_plain_text(self.title)


class ChildDatabase(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""


class Block(BaseModel):
    """A child block. Only child_database blocks carry a title we match against."""
    model_config = ConfigDict(extra="allow")

    id: str
    type: Optional[str] = None
    child_database: Optional[ChildDatabase] = None

    @property
    def database_title(self) -> Optional[str]:
        if self.child_database is None:
            return None
        return self.child_database.title


class PaginatedList(BaseModel):
    """Envelope for list endpoints (query, block children, property items)."""
    model_config = ConfigDict(extra="allow")

    results: List[Dict[str, Any]] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


class TaskRecord(BaseModel):
    """Property values for a new entry in a day's tasks database."""
    name: str
    done: bool = False
    due: Optional[str] = None

    def to_properties(self, title_property: str, done_property: str, due_property: str) -> Dict[str, Any]:
        properties: Dict[str, Any] = {
            title_property: {
                "title": [{"text": {"content": self.name}}],
            },
            done_property: {
                "type": "checkbox",
                "checkbox": self.done,
            },
        }
        if self.due:
            properties[due_property] = {
                "type": "date",
                "date": {"start": self.due},
            }
        return properties
