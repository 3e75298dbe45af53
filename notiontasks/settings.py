import os
from typing import Dict, Mapping, Optional
from pydantic import BaseModel, Field, model_validator

from .constants import (
    DAY_RELATION_FIELDS,
    NOTION_API_BASE_URL,
    NOTION_VERSION,
    WEEKDAY_NAMES,
    NotionConfigError,
)
from .date_resolver import REMINDER_HOUR

TRUE_VALUES = ("1", "true", "yes", "on")


def validate_relation_fields(relation_fields: Mapping[str, str]) -> Dict[str, str]:
    """Every weekday needs a non-empty relation field name."""
    missing = [day for day in WEEKDAY_NAMES if not relation_fields.get(day)]
    if missing:
        raise NotionConfigError(f"Relation field names missing for: {', '.join(missing)}")
    return {day: relation_fields[day] for day in WEEKDAY_NAMES}


class NotionSettings(BaseModel):
    """Runtime configuration, normally read once from the environment."""
    token: str = ""
    monthly_database_id: str = ""
    base_url: str = NOTION_API_BASE_URL
    notion_version: str = NOTION_VERSION
    max_retries: int = 3
    strict_matching: bool = False
    reminder_hour: int = REMINDER_HOUR
    relation_fields: Dict[str, str] = Field(default_factory=lambda: dict(DAY_RELATION_FIELDS))

    @model_validator(mode="after")
    def check_required(self) -> "NotionSettings":
        # NotionConfigError is not a ValueError, so pydantic lets it through unwrapped
        if not self.token:
            raise NotionConfigError("NOTION_TOKEN is not set in environment or passed to constructor.")
        if not self.monthly_database_id:
            raise NotionConfigError("MONTHLY_DATA_DATABASE_ID is not set in environment or passed to constructor.")
        if self.max_retries < 0:
            raise NotionConfigError(f"NOTION_MAX_RETRIES must be 0 or more, got {self.max_retries}.")
        if not 0 <= self.reminder_hour <= 23:
            raise NotionConfigError(f"Reminder hour must be between 0 and 23, got {self.reminder_hour}.")
        validate_relation_fields(self.relation_fields)
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NotionSettings":
        """
        Build settings from environment variables. Call load_dotenv() beforehand to pick
        up a .env file.
        """
        env = os.environ if environ is None else environ
        try:
            max_retries = int(env.get("NOTION_MAX_RETRIES", 3))
            reminder_hour = int(env.get("NOTION_REMINDER_HOUR", REMINDER_HOUR))
        except ValueError as e:
            raise NotionConfigError(f"Invalid numeric setting: {e}") from e
        return cls(
            token=env.get("NOTION_TOKEN", ""),
            monthly_database_id=env.get("MONTHLY_DATA_DATABASE_ID", ""),
            base_url=env.get("NOTION_API_BASE_URL", NOTION_API_BASE_URL),
            notion_version=env.get("NOTION_VERSION", NOTION_VERSION),
            max_retries=max_retries,
            strict_matching=env.get("NOTION_STRICT_MATCHING", "").strip().lower() in TRUE_VALUES,
            reminder_hour=reminder_hour,
        )
