#!/usr/bin/env python3
"""
Add a task to today's day page in the Notion planner.
"""

import os
from dotenv import load_dotenv
load_dotenv()

import argparse
import asyncio
import logging
import sys

from notiontasks import NotionSettings, add_task_for_current_date
from notiontasks.constants import NotionTasksException

logger = logging.getLogger("notiontasks")


async def main(task_name: str) -> None:
    try:
        settings = NotionSettings.from_env()
        task = await add_task_for_current_date(task_name, settings=settings)
        print(f"✅ Task with reminder added successfully: {task.id}")
        logger.debug(f"Updated day page: {task.model_dump()}")
    except NotionTasksException as e:
        print(f"❌ Error adding task: {e}", file=sys.stderr)
        logger.error(f"Error adding task: {e}")
    except Exception as e:
        print(f"❌ Unexpected error adding task: {e}", file=sys.stderr)
        logger.error(f"Unexpected error adding task: {e}", exc_info=True)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Add a task to today's Notion day page")
    parser.add_argument("task_name", nargs="?", default="Complete project report", help="Title of the task to add")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()
    if args.debug or os.getenv("NOTION_DEBUG"):
        logger.setLevel(logging.DEBUG)
    asyncio.run(main(args.task_name))
