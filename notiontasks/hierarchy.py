import logging
from typing import Optional

from .constants import AmbiguousMatchError, TASKS_DATABASE_TITLE, WEEK_DATABASE_TITLE
from .notion_client import NotionClient
from .notion_models import Page, Database, Block

logger = logging.getLogger(__name__)


class HierarchyNavigator:
    """
    Locates records in the month -> week -> day hierarchy.

    Notion has no lookup-by-name for nested databases, so every level is found by listing
    the parent's children (or querying its database) and matching titles exactly. The first
    match in the order Notion returns wins, unless `strict` is set, in which case a second
    exact match raises AmbiguousMatchError.
    """
    def __init__(self, client: NotionClient, strict: bool = False) -> None:
        self.client = client
        self.strict = strict

    async def find_page_in_database(self, database_id: str, title: str, title_property: str) -> Optional[Page]:
        """
        Return the first page in `database_id` whose title property equals `title`.

        :param database_id: Database to query
        :param title: Exact, case-sensitive title to look for
        :param title_property: Name of the title-type property to filter on
        :return: Matching page, or None if nothing matched
        """
        logger.debug(f"Querying database {database_id} for {title_property} == '{title}'")
        response = await self.client.query_database(
            database_id,
            filter={
                "property": title_property,
                "title": {
                    "equals": title,
                },
            },
        )
        if not response.results:
            return None
        if self.strict and len(response.results) > 1:
            raise AmbiguousMatchError(f"{len(response.results)} pages titled '{title}' found in database {database_id}.")
        return Page.model_validate(response.results[0])

    async def find_week_database_in_page(self, page_id: str, week: int) -> Optional[Database]:
        return await self._find_child_database(page_id, WEEK_DATABASE_TITLE.format(week=week))

    async def find_tasks_database_in_day(self, page_id: str, day: str) -> Optional[Database]:
        return await self._find_child_database(page_id, TASKS_DATABASE_TITLE.format(day=day))

    async def _find_child_database(self, page_id: str, title: str) -> Optional[Database]:
        """List the children of `page_id` and retrieve the child database titled `title`."""
        match = None
        cursor = None
        while True:
            children = await self.client.list_block_children(page_id, start_cursor=cursor)
            for raw_block in children.results:
                block = Block.model_validate(raw_block)
                # Non-database children (paragraphs, headings...) have no title to match
                if block.database_title != title:
                    continue
                if match is None:
                    match = block
                    if not self.strict:
                        break
                else:
                    raise AmbiguousMatchError(f"More than one child database titled '{title}' under page {page_id}.")
            if (match is not None and not self.strict) or not children.has_more:
                break
            cursor = children.next_cursor

        if match is None:
            logger.debug(f"No child database titled '{title}' under page {page_id}")
            return None
        return await self.client.retrieve_database(match.id)
