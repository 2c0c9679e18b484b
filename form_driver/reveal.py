"""
ConditionalRevealWaiter: waits for a conditionally shown field block.

Third-party conditional logic may lag behind the field it depends on. Each
poll first gives the host framework a chance to re-run its rules and only
then strips the hiding state by hand.
"""

import logging
from typing import Optional

from core.selectors import HIDDEN_CLASS, selectors

from .adapters.base import DocumentAdapter, Handle
from .models import WaitPolicy
from .visibility import is_visible

logger = logging.getLogger(__name__)


async def strip_hidden_state(adapter: DocumentAdapter, container: Handle) -> None:
    """Removes hidden markers from the container and its inner input blocks."""
    await adapter.remove_class(container, HIDDEN_CLASS)
    await adapter.remove_style(container, "display")
    await adapter.remove_style(container, "visibility")

    for node in await adapter.query_all(selectors["reveal_inner"], root=container):
        await adapter.remove_class(node, HIDDEN_CLASS)
        await adapter.remove_style(node, "display")
        await adapter.remove_style(node, "visibility")
        if await adapter.tag_name(node) == "input":
            await adapter.set_disabled(node, False)
            await adapter.remove_attribute(node, "readonly")


async def _targets_visible(
    adapter: DocumentAdapter, container: Handle, input_selector: Optional[str]
) -> bool:
    target = await adapter.query(input_selector or selectors["input"], root=container)
    if target is None:
        return False
    return await is_visible(adapter, container) and await is_visible(adapter, target)


async def ensure_revealed(
    adapter: DocumentAdapter,
    container_selector: str,
    policy: Optional[WaitPolicy] = None,
    input_selector: Optional[str] = None,
) -> None:
    """
    Waits until the field block and its inner input are both visible.

    Args:
        adapter: Document to act on
        container_selector: Selector of the field block (e.g. ``#field_1_593``)
        policy: Wait bound
        input_selector: Selector of the input inside the block; defaults to its first input

    Raises:
        WaitTimeoutError: If the block is still hidden after ``policy.timeout_ms``.
    """
    policy = policy or WaitPolicy()

    async def _attempt() -> bool:
        container = await adapter.query(container_selector)
        if container is None:
            return False

        if await adapter.supports_reapply_conditions():
            await adapter.reapply_conditions()
            if await _targets_visible(adapter, container, input_selector):
                return True

        await strip_hidden_state(adapter, container)
        return await _targets_visible(adapter, container, input_selector)

    await adapter.wait_for(
        _attempt, policy, description=f"'{container_selector}' to be revealed"
    )
    logger.debug(f"Field block '{container_selector}' is revealed.")
