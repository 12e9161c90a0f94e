"""
Pytest configuration and shared fixtures.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Set

import httpx
import pytest
import pytest_asyncio

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

WIKI = "https://en.wikipedia.org/wiki/"


class FakeLinkGraph:
    """In-memory link graph standing in for live page fetches."""

    def __init__(
        self,
        links: Dict[str, List[str]],
        failing: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
    ):
        self.links = links
        self.failing: Set[str] = set(failing)
        self.delays = delays or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def get_links(self, page: str) -> List[str]:
        self.calls.append(page)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(page, 0))
            if page in self.failing:
                raise httpx.ConnectError(f"cannot reach {page}")
            return list(self.links.get(page, []))
        finally:
            self.in_flight -= 1

    def fetch_count(self, page: str) -> int:
        return self.calls.count(page)


def wiki_html(title: str, links: Iterable[str] = (), orphan: bool = False) -> str:
    """Minimal article HTML with the given article links inside a paragraph."""
    anchors = " ".join(f'<a href="/wiki/{link}">{link}</a>' for link in links)
    banner = (
        '<table class="box-Orphan metadata plainlinks ambox ambox-style ambox-Orphan">'
        "<tr><td>This article is an orphan</td></tr></table>"
        if orphan else ""
    )
    return (
        "<html><body>"
        f'<h1 id="firstHeading">{title}</h1>'
        f'<div class="mw-parser-output">{banner}<p>{title} is linked to {anchors}.</p></div>'
        '<div id="mw-navigation"><a href="/wiki/Main_Page">Main page</a></div>'
        "</body></html>"
    )


class FakeWikipedia:
    """Serves canned article HTML through an httpx.MockTransport."""

    def __init__(self):
        self.pages: Dict[str, str] = {}
        self.redirects: Dict[str, str] = {}
        self.failing: Set[str] = set()
        self.requests: List[str] = []

    def add_page(self, title: str, links: Iterable[str] = (), heading: Optional[str] = None, orphan: bool = False):
        self.pages[WIKI + title] = wiki_html(heading or title.replace("_", " "), links, orphan)

    def add_redirect(self, source: str, target: str):
        self.redirects[WIKI + source] = WIKI + target

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url in self.failing:
            raise httpx.ConnectError("connection refused", request=request)
        if url in self.redirects:
            return httpx.Response(301, headers={"Location": self.redirects[url]})
        if url in self.pages:
            return httpx.Response(200, text=self.pages[url], headers={"Content-Type": "text/html; charset=utf-8"})
        return httpx.Response(404, text="<html><body><h1>Not Found</h1></body></html>")

    def request_count(self, title: str) -> int:
        return self.requests.count(WIKI + title)


@pytest.fixture
def fake_wikipedia() -> FakeWikipedia:
    return FakeWikipedia()


@pytest_asyncio.fixture
async def http_client(fake_wikipedia: FakeWikipedia):
    """httpx client whose requests are answered by fake_wikipedia."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_wikipedia.handler),
        follow_redirects=True,
    ) as client:
        yield client


@pytest.fixture
def make_graph():
    """Factory for FakeLinkGraph instances."""
    return FakeLinkGraph
