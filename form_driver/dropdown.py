"""
DropdownResolver: selects an option of a dropdown identified by its label text.
"""

import logging
from typing import List, Optional, Tuple

from core.selectors import selectors

from .adapters.base import DocumentAdapter, Handle
from .errors import LabelNotFoundError, OptionNotFoundError, SelectNotFoundError, WaitTimeoutError
from .lookup import find_by_text, wait_for_text
from .models import FieldDescriptor, OptionDescriptor, WaitPolicy
from .normalizer import closest_match

logger = logging.getLogger(__name__)

SELECT_LIKE_TAGS = ("select",)


async def _resolve_select(adapter: DocumentAdapter, label: Handle) -> Optional[Handle]:
    """The control named by the label's ``for``, else the first select beside the label."""
    target_id = await adapter.get_attribute(label, "for")
    if target_id:
        control = await adapter.get_by_id(target_id)
    else:
        parent = await adapter.parent(label)
        control = await adapter.query(selectors["select"], root=parent) if parent is not None else None

    if control is None or await adapter.tag_name(control) not in SELECT_LIKE_TAGS:
        return None
    return control


def _pick_option(option: OptionDescriptor, candidates: List[Tuple[str, Optional[str]]]) -> Optional[str]:
    """Value of the first option matching by text, else of the first matching by value."""
    for text, value in candidates:
        if option.matches(text):
            return value
    for _text, value in candidates:
        if option.matches(value):
            return value
    return None


async def select_dropdown(
    adapter: DocumentAdapter,
    label_text: str,
    option_text: str,
    policy: Optional[WaitPolicy] = None,
) -> None:
    """
    Selects ``option_text`` in the dropdown labelled ``label_text``.

    Options are matched by displayed text first, then by value, both exact
    after normalization. The selection is committed by assigning the value
    and dispatching ``input`` then ``change`` so conditional logic reacts as
    it would to a user.

    Raises:
        LabelNotFoundError: No label matched within ``policy.timeout_ms``.
        SelectNotFoundError: The label does not lead to a select.
        OptionNotFoundError: Neither text nor value matched.
    """
    policy = policy or WaitPolicy()
    field = FieldDescriptor(label_text)
    option = OptionDescriptor(option_text)

    try:
        await wait_for_text(adapter, selectors["label"], field, policy)
    except WaitTimeoutError as e:
        raise LabelNotFoundError(label_text, policy.timeout_ms) from e

    label = await find_by_text(adapter, selectors["label"], field)
    if label is None:
        raise LabelNotFoundError(label_text)

    control = await _resolve_select(adapter, label)
    if control is None:
        raise SelectNotFoundError(label_text)

    candidates = []
    for option_element in await adapter.query_all(selectors["select_option"], root=control):
        candidates.append(
            (await adapter.text_content(option_element), await adapter.get_value(option_element))
        )

    value = _pick_option(option, candidates)
    if value is None:
        available = [" ".join(text.split()) for text, _value in candidates]
        raise OptionNotFoundError(
            option_text,
            field_text=label_text,
            available=available,
            suggestion=closest_match(option_text, available),
        )

    await adapter.set_value(control, value)
    await adapter.dispatch_event(control, "input")
    await adapter.dispatch_event(control, "change")
    logger.debug(f"Selected option value '{value}' for label '{label_text}'.")
