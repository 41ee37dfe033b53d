"""Fake Upstream — scripted behtarzindagi.in replies behind httpx.MockTransport.

Invariants:
    - Outcomes for a URL are consumed in order; the last one repeats
    - An Exception outcome is raised inside the transport (as httpx would for a dead socket)
    - A fresh httpx.Response is built per call; every request is logged
"""

import json
from typing import Any

import httpx


class FakeUpstream:

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, list[Any]] = {}

    def on(self, url: str, *outcomes: Any) -> None:
        """Script replies for url: (status, body) tuples or Exception instances."""
        self._routes.setdefault(url, []).extend(outcomes)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def calls(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if _route_key(r) == url]

    def last(self, url: str) -> httpx.Request:
        return self.calls(url)[-1]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get(_route_key(request))
        if not queue:
            return httpx.Response(404, json={"Message": "No HTTP resource was found"})
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def _route_key(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content)
