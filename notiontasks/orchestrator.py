import datetime
import logging
from typing import Optional

from .constants import DAY_TITLE_PROPERTY, MONTH_TITLE_PROPERTY, NotFoundError
from .date_resolver import get_current_date_details, reminder_time
from .hierarchy import HierarchyNavigator
from .notion_client import NotionClient
from .notion_models import Page
from .settings import NotionSettings
from .task_writer import TaskWriter

logger = logging.getLogger(__name__)


class TaskOrchestrator:
    """
    Resolves today's day page (month -> week -> day) and adds a task to it.
    """
    def __init__(self, settings: NotionSettings, client: NotionClient) -> None:
        self.settings = settings
        self.client = client
        self.navigator = HierarchyNavigator(client, strict=settings.strict_matching)
        self.writer = TaskWriter(client, self.navigator, relation_fields=settings.relation_fields)

    async def add_task_for_current_date(self, task_name: str, now: Optional[datetime.datetime] = None) -> Page:
        now = now or datetime.datetime.now()
        details = get_current_date_details(now)
        month, week, day = details.month, details.week, details.day
        logger.info(f"Adding '{task_name}' for {day}, week {week} of {month} {details.year}")

        month_page = await self.navigator.find_page_in_database(
            self.settings.monthly_database_id, month, MONTH_TITLE_PROPERTY
        )
        if not month_page:
            raise NotFoundError(f"Month page for {month} not found.")

        week_database = await self.navigator.find_week_database_in_page(month_page.id, week)
        if not week_database:
            raise NotFoundError(f"Week {week} database not found in {month}.")

        day_page = await self.navigator.find_page_in_database(week_database.id, day, DAY_TITLE_PROPERTY)
        if not day_page:
            raise NotFoundError(f"Day page for {day} not found in Week {week}.")

        reminder = reminder_time(now, hour=self.settings.reminder_hour)
        logger.debug(f"Reminder set for {reminder}")
        return await self.writer.add_task_to_day_page(day_page.id, day, task_name, reminder)


async def add_task_for_current_date(task_name: str, settings: Optional[NotionSettings] = None,
                                    now: Optional[datetime.datetime] = None) -> Page:
    """Convenience wrapper that owns the client for a single run."""
    settings = settings or NotionSettings.from_env()
    async with NotionClient(settings.token, base_url=settings.base_url, notion_version=settings.notion_version,
                            max_retries=settings.max_retries) as client:
        return await TaskOrchestrator(settings, client).add_task_for_current_date(task_name, now=now)
