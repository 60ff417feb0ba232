"""
In-memory stand-ins for the Playwright objects the harness talks to.

FakePage answers the harness's own DocumentScripts by running a Python
equivalent against a list of FakeNode objects; any other script raises a
Playwright ``Error`` just like a script failure in a real page would.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from playwright.async_api import Error as PlaywrightError

from webtests.ui_testing.framework.hidden_actuator import CLICK_MATCHING_ELEMENTS
from webtests.ui_testing.framework.remote_document import (
    ATTRIBUTE_VALUE,
    ELEMENT_PRESENT,
    ELEMENTS_WITH_TEXT,
    PSEUDO_ELEMENT_CONTENT,
)
from webtests.ui_testing.framework.session_hygiene import CLEAR_WEB_STORAGE


@dataclass
class FakeNode:
    """A DOM node matched by any selector listed in ``selectors``."""
    selectors: Set[str]
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    pseudo: Dict[str, str] = field(default_factory=dict)
    visible: bool = True
    clicks: int = 0
    on_click: Optional[Callable[["FakeNode"], None]] = None

    def click(self) -> None:
        self.clicks += 1
        if self.on_click is not None:
            self.on_click(self)


class FakeElementHandle:
    def __init__(self, node: FakeNode):
        self.node = node
        self.disposed = False

    async def dispose(self) -> None:
        self.disposed = True

    async def text_content(self) -> str:
        return self.node.text


class FakeJSHandle:
    def __init__(self, value: Any):
        self.value = value
        self.disposed = False

    def as_element(self) -> Optional[FakeElementHandle]:
        if isinstance(self.value, FakeNode):
            return FakeElementHandle(self.value)
        return None

    async def get_properties(self) -> Dict[str, "FakeJSHandle"]:
        # keys come back unordered on purpose; callers must sort them
        properties = {str(i): FakeJSHandle(v) for i, v in enumerate(self.value)}
        return dict(sorted(properties.items(), reverse=True))

    async def dispose(self) -> None:
        self.disposed = True


class FakeBrowserContext:
    def __init__(self, browser: Optional["FakeBrowser"] = None, **options: Any):
        self.browser = browser
        self.options = options
        self.cookies: List[Dict[str, str]] = [{"name": "session", "value": "abc"}]
        self.default_timeout: Optional[int] = None
        self.pages: List["FakePage"] = []
        self.closed = False

    def set_default_timeout(self, timeout: int) -> None:
        self.default_timeout = timeout

    async def clear_cookies(self) -> None:
        self.cookies.clear()

    async def new_page(self) -> "FakePage":
        page = FakePage(context=self)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True


class FakePage:
    """Playwright Page double backed by a list of FakeNode objects."""

    def __init__(self, nodes: Optional[List[FakeNode]] = None, context: Optional[FakeBrowserContext] = None):
        self.nodes: List[FakeNode] = list(nodes or [])
        self.context = context or FakeBrowserContext()
        self.url = "https://example.test/"
        self.document_title = ""
        self.local_storage: Dict[str, str] = {"cart": "1"}
        self.session_storage: Dict[str, str] = {"step": "2"}
        self.evaluations: List[str] = []
        self.script_error: Optional[str] = None
        self.on_goto: Optional[Callable[[str], None]] = None
        self.screenshots = 0

    # -- helpers for tests -------------------------------------------------

    def add(self, *nodes: FakeNode) -> None:
        self.nodes.extend(nodes)

    def matching(self, selector: str) -> List[FakeNode]:
        return [n for n in self.nodes if selector in n.selectors]

    # -- Page API ----------------------------------------------------------

    async def goto(self, url: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self.url = url
        if self.on_goto is not None:
            self.on_goto(url)

    async def title(self) -> str:
        return self.document_title

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        self.screenshots += 1
        image = b"\x89PNG fake"
        if path:
            with open(path, "wb") as f:
                f.write(image)
        return image

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluations.append(expression)
        if self.script_error:
            raise PlaywrightError(self.script_error)

        if expression == ATTRIBUTE_VALUE.source:
            query, attribute = arg
            found = self.matching(query)
            return found[0].attributes.get(attribute) if found else None

        if expression == ELEMENT_PRESENT.source:
            (query,) = arg
            return bool(self.matching(query))

        if expression == PSEUDO_ELEMENT_CONTENT.source:
            query, position = arg
            found = self.matching(query)
            if not found:
                return ""
            return found[0].pseudo.get(position, "none")

        if expression == CLICK_MATCHING_ELEMENTS.source:
            query, content = arg
            clicked = 0
            for node in self.matching(query):
                if content and node.text != content:
                    continue
                node.click()
                clicked += 1
            return clicked

        if expression == CLEAR_WEB_STORAGE.source:
            if self.url.startswith(("about:", "data:")):
                return False
            self.local_storage.clear()
            self.session_storage.clear()
            return True

        raise PlaywrightError(f"ReferenceError: unknown script {expression[:40]!r}")

    async def evaluate_handle(self, expression: str, arg: Any = None) -> FakeJSHandle:
        self.evaluations.append(expression)
        if self.script_error:
            raise PlaywrightError(self.script_error)

        if expression == ELEMENTS_WITH_TEXT.source:
            query, content = arg
            return FakeJSHandle([
                n for n in self.matching(query) if n.text.strip() == content.strip()
            ])

        raise PlaywrightError(f"ReferenceError: unknown script {expression[:40]!r}")


class FakeBrowser:
    def __init__(self, kind: str = "chromium"):
        self.kind = kind
        self.contexts: List[FakeBrowserContext] = []
        self.closed = False

    async def new_context(self, **options: Any) -> FakeBrowserContext:
        context = FakeBrowserContext(self, **options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True


class FakePlaywright:
    def __init__(self):
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True


class FakePlaywrightStarter:
    """Mimics ``async_playwright()``: an object with an async ``start()``."""

    def __init__(self):
        self.instances: List[FakePlaywright] = []

    def __call__(self) -> "FakePlaywrightStarter":
        return self

    async def start(self) -> FakePlaywright:
        playwright = FakePlaywright()
        self.instances.append(playwright)
        return playwright


class FakeBrowserManager:
    """Stand-in for BrowserManager used by ScenarioRunner tests."""

    created: List["FakeBrowserManager"] = []

    def __init__(self, settings, registry=None):
        self.settings = settings
        self.registry = registry
        self.started = False
        self.closed = False
        self.page: Optional[FakePage] = None
        FakeBrowserManager.created.append(self)

    async def start(self) -> None:
        self.started = True

    async def new_page(self) -> FakePage:
        self.page = FakePage()
        return self.page

    async def close(self) -> None:
        self.closed = True
