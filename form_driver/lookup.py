from typing import Optional

from .adapters.base import DocumentAdapter, Handle
from .models import FieldDescriptor, WaitPolicy


async def find_by_text(
    adapter: DocumentAdapter, selector: str, field: FieldDescriptor
) -> Optional[Handle]:
    """First element in document order whose text contains the descriptor text."""
    for candidate in await adapter.query_all(selector):
        if field.matches(await adapter.text_content(candidate)):
            return candidate
    return None


async def wait_for_text(
    adapter: DocumentAdapter, selector: str, field: FieldDescriptor, policy: WaitPolicy
) -> Handle:
    """
    Waits until some ``selector`` element contains the descriptor text.

    Raises:
        WaitTimeoutError: If no element matches within ``policy.timeout_ms``.
    """
    async def _find() -> Optional[Handle]:
        return await find_by_text(adapter, selector, field)

    return await adapter.wait_for(
        _find,
        policy,
        description=f"{selector} containing {field.text!r}",
    )
