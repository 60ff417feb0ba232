"""
Cookie and web storage cleanup between scenarios.
"""

from __future__ import annotations

from loguru import logger
from playwright.async_api import Page

from .remote_document import DocumentScript, RemoteDocumentQuery


# Opaque origins (about:blank, data: URLs) have no usable storage
CLEAR_WEB_STORAGE = DocumentScript(
    name="clear_web_storage",
    params=(),
    source="""
() => {
    if (window.location.origin === 'null') {
        return false;
    }
    window.localStorage.clear();
    window.sessionStorage.clear();
    return true;
}
""",
)


class SessionHygiene:
    """Clears cookies, localStorage and sessionStorage for a page."""

    def __init__(self, page: Page, query: RemoteDocumentQuery):
        self.page = page
        self.query = query

    async def clear_cookies(self) -> None:
        await self.page.context.clear_cookies()
        logger.debug("Cookies cleared")

    async def clear_storage(self) -> bool:
        """
        Clear local and session storage of the current document.

        Returns:
            False when the document has an opaque origin and nothing was cleared
        """
        cleared = bool(await self.query.evaluate(CLEAR_WEB_STORAGE))
        if cleared:
            logger.debug("Local and session storage cleared")
        else:
            logger.debug(f"No web storage to clear on {self.page.url}")
        return cleared

    async def clear_all(self) -> None:
        # cookies first, then storage
        await self.clear_cookies()
        await self.clear_storage()


__all__ = [
    "SessionHygiene",
    "CLEAR_WEB_STORAGE",
]
