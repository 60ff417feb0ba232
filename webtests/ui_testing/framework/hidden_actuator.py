"""
================================================================================
Hidden Element Actuator
================================================================================

Clicks elements from inside the page, bypassing Playwright's actionability
checks (visible, stable, in viewport). Used for menus whose children are
only rendered on CSS ``:hover``.

The click does not wait for whatever it triggers; callers wait for the
effect separately (page load, attribute flip, ...).

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from .remote_document import DocumentScript, RemoteDocumentQuery


CLICK_MATCHING_ELEMENTS = DocumentScript(
    name="click_matching_elements",
    params=("query", "content"),
    source="""
([query, content]) => {
    const txtProp = ('textContent' in document) ? 'textContent' : 'innerText';
    let clicked = 0;
    for (const el of document.querySelectorAll(query)) {
        if (content && el[txtProp] !== content) {
            continue;
        }
        el.click();
        clicked += 1;
    }
    return clicked;
}
""",
)


class HiddenElementActuator:
    """
    Batch click-by-selector executed in the document.

    Usage:
        actuator = HiddenElementActuator(query)
        await actuator.click_all('nav[role="navigation"] ul li a', "Safety Boots")
    """

    def __init__(self, query: RemoteDocumentQuery):
        self.query = query

    async def click_all(self, selector: str, text_to_match: Optional[str] = None) -> int:
        """
        Click every node matching ``selector``, in document order.

        Args:
            selector: CSS selector
            text_to_match: When given, only nodes whose exact (untrimmed)
                text content equals it are clicked

        Returns:
            Number of nodes clicked (0 is not an error)
        """
        label = f"{selector} ({text_to_match})" if text_to_match else selector
        with allure.step(f"Click hidden element: {label}"):
            clicked = await self.query.evaluate(
                CLICK_MATCHING_ELEMENTS, selector, text_to_match or None
            )
        logger.debug(f"Clicked {clicked} element(s) matching {label}")
        return int(clicked or 0)


__all__ = [
    "HiddenElementActuator",
    "CLICK_MATCHING_ELEMENTS",
]
