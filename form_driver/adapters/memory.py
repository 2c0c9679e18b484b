"""
In-memory document for exercising the form driver without a browser.

Handles are BeautifulSoup ``Tag`` objects and selectors are matched with
soupsieve, so any selector the page would accept works here too. Live
state is kept in the markup the way the DOM reflects it: ``checked``,
``disabled``, ``readonly``, ``value``, ``selected``, ``class`` and inline
``style`` (with ``!important``). On top of that the document resolves a
small stylesheet, computed display/visibility and layout presence, records
synthetic events with document-level listeners, and accepts an optional
"reapply conditions" hook standing in for the host framework.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Tuple

import soupsieve
from bs4 import BeautifulSoup, Tag

from .base import DocumentAdapter

BLOCK_TAGS = {
    "html", "body", "div", "form", "fieldset", "legend", "p", "ul", "ol",
    "li", "section", "header", "footer", "h1", "h2", "h3", "h4",
}
NOT_RENDERED_TAGS = {"head", "script", "style", "title", "template"}
CONTROL_TAGS = {"input", "select", "textarea", "button"}

DEFAULT_STYLESHEET: Dict[str, Dict[str, str]] = {
    ".gform_hidden": {"display": "none"},
    'input[type="hidden"]': {"display": "none"},
}

Declarations = Dict[str, Tuple[str, bool]]
Listener = Callable[[Tag], None]


def parse_declarations(text: str) -> Declarations:
    """``"display: none !important; color: red"`` -> ``{"display": ("none", True), ...}``"""
    declarations: Declarations = {}
    for chunk in text.split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        value = value.strip()
        important = value.endswith("!important")
        if important:
            value = value[: -len("!important")].strip()
        declarations[prop.strip().lower()] = (value, important)
    return declarations


def inline_style(element: Tag) -> Declarations:
    return parse_declarations(element.get("style", ""))


def _write_style(element: Tag, declarations: Declarations) -> None:
    if not declarations:
        element.attrs.pop("style", None)
        return
    element["style"] = "; ".join(
        f"{prop}: {value}{' !important' if important else ''}"
        for prop, (value, important) in declarations.items()
    )


def _ancestors(element: Tag) -> List[Tag]:
    """Element ancestors, nearest first; the BeautifulSoup document object is not one."""
    found = []
    node = element.parent
    while node is not None and not isinstance(node, BeautifulSoup):
        found.append(node)
        node = node.parent
    return found


class MemoryDocument(DocumentAdapter):
    """DocumentAdapter whose handles are BeautifulSoup tags."""

    def __init__(
        self,
        soup: BeautifulSoup,
        stylesheet: Optional[Dict[str, Dict[str, str]]] = None,
        reapply_conditions: Optional[Callable[["MemoryDocument"], None]] = None,
    ):
        self.root = soup
        rules = dict(DEFAULT_STYLESHEET)
        rules.update(stylesheet or {})
        self.stylesheet = [
            (soupsieve.compile(selector), parse_declarations("; ".join(f"{p}: {v}" for p, v in props.items())))
            for selector, props in rules.items()
        ]
        self.events: List[Tuple[Tag, str]] = []
        self.reapply_calls = 0
        self._reapply = reapply_conditions
        self._listeners: Dict[str, List[Listener]] = {}

    @classmethod
    def from_html(cls, html: str, **kwargs) -> "MemoryDocument":
        return cls(BeautifulSoup(html, "html.parser"), **kwargs)

    def on(self, event_type: str, listener: Listener) -> None:
        """Register a document-level listener (events always bubble here)."""
        self._listeners.setdefault(event_type, []).append(listener)

    def element(self, selector: str) -> Tag:
        """Synchronous lookup for test assertions."""
        element = self.root.select_one(selector)
        if element is None:
            raise LookupError(selector)
        return element

    def events_for(self, element: Tag) -> List[str]:
        return [event_type for target, event_type in self.events if target is element]

    def _fire(self, element: Tag, event_type: str) -> None:
        self.events.append((element, event_type))
        for listener in list(self._listeners.get(event_type, [])):
            listener(element)

    # --- Style resolution ---

    def _declared(self, element: Tag, prop: str) -> Optional[str]:
        sheet_value, sheet_important = None, False
        for selector, props in self.stylesheet:
            if prop in props and selector.match(element):
                value, important = props[prop]
                if important or not sheet_important:
                    sheet_value, sheet_important = value, important
        inline = inline_style(element).get(prop)
        if inline and inline[1]:
            return inline[0]
        if sheet_important:
            return sheet_value
        if inline:
            return inline[0]
        return sheet_value

    def _display(self, element: Tag) -> str:
        declared = self._declared(element, "display")
        if declared:
            return declared
        if element.name in NOT_RENDERED_TAGS:
            return "none"
        if element.name in BLOCK_TAGS:
            return "block"
        if element.name in CONTROL_TAGS:
            return "inline-block"
        return "inline"

    def _visibility(self, element: Tag) -> str:
        for node in [element, *_ancestors(element)]:
            declared = self._declared(node, "visibility")
            if declared and declared != "inherit":
                return declared
        return "visible"

    def _attached(self, element: Tag) -> bool:
        node = element
        while node.parent is not None:
            node = node.parent
        return node is self.root

    # --- DocumentAdapter ---

    async def query_all(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        return (root if root is not None else self.root).select(selector)

    async def get_by_id(self, element_id: str) -> Optional[Tag]:
        return self.root.find(id=element_id)

    async def closest(self, element: Tag, selector: str) -> Optional[Tag]:
        return soupsieve.closest(selector, element)

    async def parent(self, element: Tag) -> Optional[Tag]:
        ancestors = _ancestors(element)
        return ancestors[0] if ancestors else None

    async def text_content(self, element: Tag) -> str:
        return element.get_text()

    async def tag_name(self, element: Tag) -> str:
        return element.name

    async def get_attribute(self, element: Tag, name: str) -> Optional[str]:
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value) if value else None
        return value

    async def get_value(self, element: Tag) -> Optional[str]:
        if element.name == "option":
            if element.has_attr("value"):
                return element["value"]
            return re.sub(r"\s+", " ", element.get_text()).strip()
        if element.name == "select":
            options = element.find_all("option")
            for option in options:
                if option.has_attr("selected"):
                    return await self.get_value(option)
            return await self.get_value(options[0]) if options else ""
        if element.name == "textarea":
            return element.get_text()
        if element.name == "input":
            default = "on" if element.get("type") in ("radio", "checkbox") else ""
            return element.get("value", default)
        return None

    async def set_value(self, element: Tag, value: str) -> None:
        if element.name == "select":
            # Unknown values leave no option selected
            matched = False
            for option in element.find_all("option"):
                option.attrs.pop("selected", None)
                if not matched and await self.get_value(option) == value:
                    option["selected"] = ""
                    matched = True
        elif element.name == "textarea":
            element.string = value
        else:
            element["value"] = value

    async def set_disabled(self, element: Tag, disabled: bool) -> None:
        if disabled:
            element["disabled"] = ""
        else:
            element.attrs.pop("disabled", None)

    async def remove_attribute(self, element: Tag, name: str) -> None:
        element.attrs.pop(name, None)

    async def has_class(self, element: Tag, class_name: str) -> bool:
        return class_name in element.get("class", [])

    async def remove_class(self, element: Tag, class_name: str) -> None:
        remaining = [cls for cls in element.get("class", []) if cls != class_name]
        if remaining:
            element["class"] = remaining
        else:
            element.attrs.pop("class", None)

    async def remove_style(self, element: Tag, prop: str) -> None:
        declarations = inline_style(element)
        declarations.pop(prop, None)
        _write_style(element, declarations)

    async def set_style(self, element: Tag, prop: str, value: str, important: bool = False) -> None:
        declarations = inline_style(element)
        declarations[prop] = (value, important)
        _write_style(element, declarations)

    async def computed_style(self, element: Tag) -> Dict[str, str]:
        return {"display": self._display(element), "visibility": self._visibility(element)}

    async def has_layout(self, element: Tag) -> bool:
        if not self._attached(element):
            return False
        return all(self._display(node) != "none" for node in [element, *_ancestors(element)])

    async def dispatch_event(self, element: Tag, event_type: str) -> None:
        self._fire(element, event_type)

    async def click(self, element: Tag) -> None:
        if element.has_attr("disabled"):
            return
        input_type = element.get("type")
        checkable = element.name == "input" and input_type in ("radio", "checkbox")
        was_checked = element.has_attr("checked")
        if checkable and input_type == "radio":
            name = element.get("name")
            if name:
                for radio in self.root.find_all("input", attrs={"type": "radio", "name": name}):
                    radio.attrs.pop("checked", None)
            element["checked"] = ""
        elif checkable and was_checked:
            del element["checked"]
        elif checkable:
            element["checked"] = ""
        self._fire(element, "click")
        if checkable and element.has_attr("checked") != was_checked:
            self._fire(element, "input")
            self._fire(element, "change")

    async def fill(self, element: Tag, value: str) -> None:
        if element.has_attr("disabled") or element.has_attr("readonly"):
            raise ValueError(f"Element is not editable: {element.name}#{element.get('id', '')}")
        await self.set_value(element, value)
        self._fire(element, "input")

    async def supports_reapply_conditions(self) -> bool:
        return self._reapply is not None

    async def reapply_conditions(self) -> None:
        if self._reapply is None:
            raise NotImplementedError("No reapply-conditions hook was provided")
        self.reapply_calls += 1
        self._reapply(self)
