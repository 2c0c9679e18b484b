"""
LegendOptionSelector: clicks a radio or checkbox option of a question
identified by its legend text.

Falls back to the input's value when an option has no label, so small
markup changes on the host form do not break the lookup.
"""

import logging
from typing import Optional

from core.selectors import css_attribute_value, selectors

from .adapters.base import DocumentAdapter, Handle
from .container import resolve_container
from .errors import LegendNotFoundError, OptionNotFoundError, WaitTimeoutError
from .lookup import find_by_text, wait_for_text
from .models import FieldDescriptor, OptionDescriptor, WaitPolicy
from .normalizer import closest_match

logger = logging.getLogger(__name__)


async def _choice_text(adapter: DocumentAdapter, container: Handle, choice: Handle) -> Optional[str]:
    """Text a user sees for a choice: its enclosing label, its for-label, or its value."""
    label = await adapter.closest(choice, selectors["label"])
    if label is None:
        choice_id = await adapter.get_attribute(choice, "id")
        if choice_id:
            label = await adapter.query(
                selectors["label_for"].format(id=css_attribute_value(choice_id)), root=container
            )
    if label is not None:
        return await adapter.text_content(label)
    return await adapter.get_value(choice)


async def select_option(
    adapter: DocumentAdapter,
    legend_text: str,
    option_text: str,
    policy: Optional[WaitPolicy] = None,
) -> None:
    """
    Activates the option ``option_text`` of the group captioned ``legend_text``.

    The legend matches when its normalized text contains the normalized
    ``legend_text``; the option must match exactly after normalization.
    The first match in document order wins for both.

    Raises:
        LegendNotFoundError: No legend matched within ``policy.timeout_ms``.
        ContainerNotFoundError: The legend has no container.
        OptionNotFoundError: No radio/checkbox of the group matched.
    """
    policy = policy or WaitPolicy()
    field = FieldDescriptor(legend_text)
    option = OptionDescriptor(option_text)

    try:
        await wait_for_text(adapter, selectors["legend"], field, policy)
    except WaitTimeoutError as e:
        raise LegendNotFoundError(legend_text, policy.timeout_ms) from e

    # Re-locate: the page may have re-rendered while we waited
    legend = await find_by_text(adapter, selectors["legend"], field)
    if legend is None:
        raise LegendNotFoundError(legend_text)

    container = await resolve_container(adapter, legend)
    choices = await adapter.query_all(selectors["choice_input"], root=container)

    seen = []
    for choice in choices:
        text = await _choice_text(adapter, container, choice)
        if text:
            seen.append(" ".join(text.split()))
        if text and option.matches(text):
            await adapter.click(choice)
            logger.debug(f"Selected '{option_text}' for legend '{legend_text}'.")
            return

    raise OptionNotFoundError(
        option_text,
        field_text=legend_text,
        available=seen,
        suggestion=closest_match(option_text, seen),
    )
