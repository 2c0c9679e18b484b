import logging
from typing import Optional

from .adapters.base import DocumentAdapter
from .models import WaitPolicy
from .visibility import wait_until_visible

logger = logging.getLogger(__name__)


async def fill_visible_input(
    adapter: DocumentAdapter,
    selector: str,
    value: str,
    policy: Optional[WaitPolicy] = None,
) -> None:
    """Fills a text input once it is cooperatively visible."""
    element = await wait_until_visible(adapter, selector, policy)
    await adapter.fill(element, value)
    logger.debug(f"Filled '{selector}'.")
