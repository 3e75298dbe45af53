from typing import Dict, Optional

NOTION_API_BASE_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"

BASE_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Same order as datetime.weekday(): Monday == 0
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Property names used by the workspace templates
MONTH_TITLE_PROPERTY = "Name"
DAY_TITLE_PROPERTY = "Day"
TASK_TITLE_PROPERTY = "Name"
TASK_DONE_PROPERTY = "Done"
TASK_DUE_PROPERTY = "Due Date"

WEEK_DATABASE_TITLE = "WEEK {week}"
TASKS_DATABASE_TITLE = "{day} Tasks"

# Relation property on each day page pointing at that day's tasks
DAY_RELATION_FIELDS: Dict[str, str] = {day: f"{day} Tasks" for day in WEEKDAY_NAMES}

# Notion rejects page updates carrying more than 100 relation entries
RELATION_UPDATE_LIMIT = 100


class NotionTasksException(Exception):
    """Base exception for everything raised by notiontasks."""
    pass


class NotionConfigError(NotionTasksException):
    pass


class NotionAPIError(NotionTasksException):
    """Raised when the Notion API answers with a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class NotFoundError(NotionTasksException):
    """A month, week, day or tasks database is missing from the expected place."""
    pass


class MissingRelationFieldError(NotFoundError):
    pass


class AmbiguousMatchError(NotionTasksException):
    pass


class ReminderTimeValidationError(NotionTasksException, ValueError):
    pass


class TaskCreationError(NotionTasksException):
    pass


class RelationLimitError(NotionTasksException):
    """The day's relation would exceed what a single page update can carry."""
    pass
