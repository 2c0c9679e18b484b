import logging

from core.selectors import selectors

from .adapters.base import DocumentAdapter, Handle
from .errors import ContainerNotFoundError

logger = logging.getLogger(__name__)


async def resolve_container(adapter: DocumentAdapter, legend: Handle) -> Handle:
    """
    Returns the field container that scopes the inputs of a legend.

    Priority: the enclosing Gravity Forms field wrapper, then the enclosing
    fieldset, then the legend's parent.

    Raises:
        ContainerNotFoundError: If the legend has no parent at all.
    """
    for selector in (selectors["field_group"], selectors["fieldset"]):
        container = await adapter.closest(legend, selector)
        if container is not None:
            logger.debug(f"Resolved legend container via '{selector}'")
            return container

    parent = await adapter.parent(legend)
    if parent is None:
        raise ContainerNotFoundError(await adapter.text_content(legend))
    return parent
