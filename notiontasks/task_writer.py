import logging
import re
from typing import Dict, List, Optional

from .constants import (
    DAY_RELATION_FIELDS,
    TASK_DONE_PROPERTY,
    TASK_DUE_PROPERTY,
    TASK_TITLE_PROPERTY,
    MissingRelationFieldError,
    NotFoundError,
    RELATION_UPDATE_LIMIT,
    RelationLimitError,
    ReminderTimeValidationError,
    TaskCreationError,
)
from .hierarchy import HierarchyNavigator
from .notion_client import NotionClient
from .notion_models import Page, TaskRecord

logger = logging.getLogger(__name__)

REMINDER_TIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z", re.ASCII)


def validate_reminder_time(reminder_time: Optional[str]) -> None:
    """Empty reminders are allowed; anything else must be a UTC ISO 8601 timestamp."""
    if reminder_time and not REMINDER_TIME_PATTERN.fullmatch(reminder_time):
        raise ReminderTimeValidationError(
            f"Invalid reminder time format: '{reminder_time}'. Must be ISO 8601 formatted string (YYYY-MM-DDTHH:MM:SS[.sss]Z)."
        )


class TaskWriter:
    def __init__(self, client: NotionClient, navigator: HierarchyNavigator,
                 relation_fields: Optional[Dict[str, str]] = None) -> None:
        self.client = client
        self.navigator = navigator
        self.relation_fields = relation_fields or DAY_RELATION_FIELDS

    async def add_task_to_day_page(self, day_page_id: str, day_name: str, task_name: str,
                                   reminder_time: Optional[str]) -> Page:
        """
        Create a task in the day's tasks database and link it first in the day's relation.
        Days already linking 100 tasks cannot take another in one update; the task is then
        left unlinked and RelationLimitError is raised.

        :param day_page_id: Id of the day page (e.g. "Tuesday" inside "WEEK 3")
        :param day_name: Weekday name, selects the tasks database and relation field
        :param task_name: Title of the new task
        :param reminder_time: Due date as an ISO 8601 UTC string, may be empty
        :return: The updated day page as returned by Notion
        """
        validate_reminder_time(reminder_time)
        relation_field = self.relation_fields.get(day_name)
        if relation_field is None:
            raise MissingRelationFieldError(f"No relation field configured for '{day_name}'.")

        tasks_database = await self.navigator.find_tasks_database_in_day(day_page_id, day_name)
        if not tasks_database:
            raise NotFoundError("Tasks database not found in the day page.")

        task = TaskRecord(name=task_name, done=False, due=reminder_time or None)
        created = await self.client.create_page(
            tasks_database.id,
            task.to_properties(TASK_TITLE_PROPERTY, TASK_DONE_PROPERTY, TASK_DUE_PROPERTY),
        )
        if not created:
            raise TaskCreationError("Task creation failed.")
        logger.info(f"Created task '{task_name}' ({created.id}) in {tasks_database.plain_title or tasks_database.id}")

        try:
            existing_ids = await self._get_relation_ids(day_page_id, relation_field)
            relation_ids = [created.id, *existing_ids]
            if len(relation_ids) > RELATION_UPDATE_LIMIT:
                raise RelationLimitError(
                    f"'{relation_field}' would hold {len(relation_ids)} tasks; Notion accepts at most "
                    f"{RELATION_UPDATE_LIMIT} relation entries per update."
                )
            updated = await self.client.update_page(
                day_page_id,
                {
                    relation_field: {
                        "relation": [{"id": task_id} for task_id in relation_ids],
                    },
                },
            )
        except Exception:
            logger.error(f"Task {created.id} was created but could not be linked to '{relation_field}' on page {day_page_id}")
            raise
        return updated

    async def _get_relation_ids(self, page_id: str, relation_field: str) -> List[str]:
        page = await self.client.retrieve_page(page_id)
        prop = page.relation_property(relation_field)
        if prop is None:
            raise MissingRelationFieldError(f"Relation field '{relation_field}' not found on page {page_id}.")
        if not prop.get("has_more"):
            return page.relation_ids(relation_field)

        # Pages inline at most 25 relation ids; fetch the full list from the property endpoint
        ids = []
        cursor = None
        while True:
            items = await self.client.retrieve_page_property(page_id, prop["id"], start_cursor=cursor)
            ids.extend(item["relation"]["id"] for item in items.results if item.get("relation"))
            if not items.has_more:
                return ids
            cursor = items.next_cursor
