"""
================================================================================
Remote Document Query
================================================================================

Runs closure-free scripts inside the page and marshals the results back.

Every script is a ``DocumentScript``: a named JavaScript arrow function that
receives exactly one array argument, destructured into its declared
parameters. Only those arguments cross into the page, and they must be JSON
serializable, so a script can never depend on state from the test process.

Components:
    - DocumentScript: Serializable script payload
    - PseudoPosition: ::before / ::after selector
    - RemoteDocumentQuery: evaluate / evaluate_elements plus standard queries

================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from loguru import logger
from playwright.async_api import ElementHandle, Error as PlaywrightError, Page

from .errors import RemoteExecutionError


@dataclass(frozen=True)
class DocumentScript:
    """
    A script evaluated in the page's JavaScript realm.

    Attributes:
        name: Identifier used in logs and errors
        params: Names of the values destructured from the argument array
        source: Arrow function taking a single array argument
    """
    name: str
    params: Tuple[str, ...]
    source: str

    def bind(self, *args: Any) -> List[Any]:
        """
        Validate arguments against the payload contract.

        Raises:
            TypeError: On arity mismatch or a non-serializable argument
        """
        if len(args) != len(self.params):
            raise TypeError(
                f"Script '{self.name}' takes {len(self.params)} argument(s) "
                f"({', '.join(self.params) or 'none'}), got {len(args)}"
            )
        for param, value in zip(self.params, args):
            try:
                json.dumps(value)
            except (TypeError, ValueError) as e:
                raise TypeError(
                    f"Argument '{param}' of script '{self.name}' is not serializable: {e}"
                ) from e
        return list(args)


class PseudoPosition(str, Enum):
    """Pseudo-element whose generated content is inspected."""
    BEFORE = "before"
    AFTER = "after"


# =============================================================================
# Standard Scripts
# =============================================================================

ELEMENTS_WITH_TEXT = DocumentScript(
    name="elements_with_text",
    params=("query", "content"),
    source="""
([query, content]) => {
    const txtProp = ('textContent' in document) ? 'textContent' : 'innerText';
    const wanted = String(content).trim();
    return Array.from(document.querySelectorAll(query))
        .filter((el) => (el[txtProp] || '').trim() === wanted);
}
""",
)

PSEUDO_ELEMENT_CONTENT = DocumentScript(
    name="pseudo_element_content",
    params=("query", "position"),
    source="""
([query, position]) => {
    const el = document.querySelector(query);
    const styles = el ? window.getComputedStyle(el, '::' + position) : null;
    return styles ? styles.getPropertyValue('content') : '';
}
""",
)

ATTRIBUTE_VALUE = DocumentScript(
    name="attribute_value",
    params=("query", "attribute"),
    source="""
([query, attribute]) => {
    const el = document.querySelector(query);
    return el ? el.getAttribute(attribute) : null;
}
""",
)

ELEMENT_PRESENT = DocumentScript(
    name="element_present",
    params=("query",),
    source="""
([query]) => document.querySelector(query) !== null
""",
)

# Computed ``content`` values that mean "no generated content"
_NO_CONTENT = ("none", "normal")


class RemoteDocumentQuery:
    """
    Evaluates DocumentScripts in a Playwright page.

    Usage:
        query = RemoteDocumentQuery(page)
        links = await query.find_by_text("nav a", "Safety Boots")
        banner = await query.get_pseudo_element_value("header", "before")
    """

    def __init__(self, page: Page):
        self.page = page

    async def evaluate(self, script: DocumentScript, *args: Any) -> Any:
        """
        Run ``script`` and return its serializable result.

        Raises:
            TypeError: If the arguments break the payload contract
            RemoteExecutionError: If the script throws in the page
        """
        payload = script.bind(*args)
        logger.debug(f"Evaluating {script.name}{tuple(args)!r}")
        try:
            return await self.page.evaluate(script.source, payload)
        except PlaywrightError as e:
            raise RemoteExecutionError(script.name, e.message) from e

    async def evaluate_elements(self, script: DocumentScript, *args: Any) -> List[ElementHandle]:
        """
        Run a script that returns an array of nodes.

        Returns:
            Element handles in document order, owned by the caller
        """
        payload = script.bind(*args)
        logger.debug(f"Evaluating {script.name}{tuple(args)!r} for elements")
        try:
            array_handle = await self.page.evaluate_handle(script.source, payload)
            try:
                properties = await array_handle.get_properties()
            finally:
                await array_handle.dispose()
        except PlaywrightError as e:
            raise RemoteExecutionError(script.name, e.message) from e

        elements: List[ElementHandle] = []
        for key in sorted((k for k in properties if k.isdigit()), key=int):
            element = properties[key].as_element()
            if element is not None:
                elements.append(element)
        return elements

    # =========================================================================
    # Standard Queries
    # =========================================================================

    async def find_by_text(self, selector: str, text: str) -> List[ElementHandle]:
        """
        Return every node matching ``selector`` whose trimmed text equals ``text``.

        The nodes do not have to be visible, so interactions on them may be
        restricted.
        """
        return await self.evaluate_elements(ELEMENTS_WITH_TEXT, selector, text)

    async def get_pseudo_element_value(
        self,
        selector: str,
        position: Union[PseudoPosition, str],
    ) -> str:
        """
        Return the computed ``content`` of a ::before/::after pseudo-element.

        Returns an empty string when the element does not exist or has no
        generated content.
        """
        position = PseudoPosition(position)
        value = await self.evaluate(PSEUDO_ELEMENT_CONTENT, selector, position.value)
        if not value or value in _NO_CONTENT:
            return ""
        return value

    async def get_attribute(self, selector: str, attribute: str) -> Optional[str]:
        """Return an attribute value, or None if the element or attribute is missing."""
        return await self.evaluate(ATTRIBUTE_VALUE, selector, attribute)

    async def is_present(self, selector: str) -> bool:
        return bool(await self.evaluate(ELEMENT_PRESENT, selector))


__all__ = [
    "DocumentScript",
    "PseudoPosition",
    "RemoteDocumentQuery",
    "ELEMENTS_WITH_TEXT",
    "PSEUDO_ELEMENT_CONTENT",
    "ATTRIBUTE_VALUE",
    "ELEMENT_PRESENT",
]
