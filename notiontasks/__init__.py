import logging
import sys

from .notion_client import NotionClient
from .orchestrator import TaskOrchestrator, add_task_for_current_date
from .settings import NotionSettings

time_format = "%Y-%m-%d %I:%M.%S %p"

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
stream_handler = logging.StreamHandler(sys.stdout)

formatter = logging.Formatter(fmt='%(asctime)s - %(levelname)s - %(message)s', datefmt=time_format)
stream_handler.setFormatter(formatter)

logger.addHandler(stream_handler)
