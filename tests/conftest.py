"""Shared fixtures: an in-process fake of the Stellify API."""

import itertools
import json

import httpx
import pytest

from stellify_core.client import StellifyClient
from stellify_tools.catalogue import build_catalogue
from stellify_tools.dispatcher import Dispatcher

API_URL = "https://stellify.test/api/v1"
API_TOKEN = "test-token"
_BASE_PATH = "/api/v1"


class FakeStellify:
    """Serves canned responses keyed by (method, path) and records requests.

    Paths are relative to the API base, e.g. ("POST", "/file").  A route can
    be an httpx.Response, or a callable taking the request and returning one.
    Unregistered routes answer 404 like the real API would.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], object] = {}

    def reply(self, method: str, path: str, body=None, status: int = 200) -> None:
        if body is None:
            self.routes[(method, path)] = httpx.Response(status)
        else:
            self.routes[(method, path)] = httpx.Response(status, json=body)

    def on(self, method: str, path: str, responder) -> None:
        self.routes[(method, path)] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(_BASE_PATH)
        responder = self.routes.get((request.method, path))
        if responder is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})
        if callable(responder):
            return responder(request)
        return responder

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.removeprefix(_BASE_PATH) == path
        ]


def request_json(request: httpx.Request):
    return json.loads(request.content)


def minting_responder(prefix: str = "uuid"):
    """Respond to each create with a fresh uuid, echoing the posted name."""
    counter = itertools.count(1)

    def respond(request: httpx.Request) -> httpx.Response:
        body = request_json(request)
        return httpx.Response(201, json={"data": {"uuid": f"{prefix}-{next(counter)}", "name": body.get("name")}})

    return respond


@pytest.fixture
def fake_api():
    return FakeStellify()


@pytest.fixture
async def client(fake_api):
    async with StellifyClient(API_URL, API_TOKEN, transport=httpx.MockTransport(fake_api.handler)) as c:
        yield c


@pytest.fixture
def catalogue():
    return build_catalogue()


@pytest.fixture
def dispatcher(catalogue, client):
    return Dispatcher(catalogue, client)
