# =============================================================================
# stellify_core/client.py  -  Stellify HTTP API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One async method per Stellify API endpoint.  Each method:
#     1. serializes its arguments (path segment, query params, or JSON body)
#     2. issues exactly ONE HTTP request with the bearer token attached
#     3. runs the parsed body through the endpoint's decoder
#
#   No retries, no caching, no batching.  Calling create_file twice creates
#   two files.
#
# FAILURE MODES (all raised, never swallowed):
#   RemoteAPIError  non-2xx status, or the request never completed
#   DecodeError     2xx status but the body is not JSON / not the right shape
#
# TESTING:
#   Pass an httpx.MockTransport as `transport` and every request is served
#   in-process.  See tests/conftest.py.
# =============================================================================

import logging
from typing import Any

import httpx

from stellify_core.decoding import (
    decode_collection,
    decode_deletion,
    decode_element_map,
    decode_entity,
    decode_payload,
    decode_tree,
)
from stellify_core.errors import DecodeError, RemoteAPIError

logger = logging.getLogger(__name__)


def _error_message(method: str, path: str, response: httpx.Response, detail: Any) -> str:
    """Prefer the API's own explanation; fall back to the status line."""
    if isinstance(detail, dict):
        for key in ("message", "error"):
            if isinstance(detail.get(key), str) and detail[key]:
                return detail[key]
    return f"{method} {path} failed with HTTP {response.status_code}"


def _error_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class StellifyClient:
    """Thin async wrapper around the Stellify REST API."""

    def __init__(
        self,
        api_url: str,
        api_token: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=api_url,
            headers={
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "StellifyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # Transport
    # =========================================================================
    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("→ %s %s", method, path)
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.TransportError as exc:
            raise RemoteAPIError(str(exc) or exc.__class__.__name__) from exc

        logger.debug("← %s %s %s", method, path, response.status_code)

        if response.is_error:
            detail = _error_detail(response)
            raise RemoteAPIError(
                _error_message(method, path, response, detail),
                status_code=response.status_code,
                detail=detail,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"{method} {path} returned a non-JSON body", body=response.text) from exc

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", path, json=body)

    async def _put(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("PUT", path, json=body)

    async def _delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    # =========================================================================
    # Files
    # =========================================================================
    async def create_file(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/file", params))

    async def get_file(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/file/{uuid}"))

    async def search_files(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_collection(await self._get("/file/search", params))

    # =========================================================================
    # Methods
    # =========================================================================
    async def create_method(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/method", params))

    async def add_method_body(self, params: dict[str, Any]) -> dict[str, Any]:
        """Send PHP statements to be parsed into the method body."""
        return decode_payload(await self._post("/code", params))

    async def get_method(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/method/{uuid}"))

    async def search_methods(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_collection(await self._get("/method/search", params))

    # =========================================================================
    # Statements
    # =========================================================================
    async def create_statement(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/statement", params))

    async def add_statement_code(self, params: dict[str, Any]) -> dict[str, Any]:
        # Same parser endpoint as method bodies; the statement_uuid field
        # tells Stellify which statement to fill.
        return decode_payload(await self._post("/code", params))

    async def get_statement(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/statement/{uuid}"))

    # =========================================================================
    # Routes
    # =========================================================================
    async def create_route(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/route", params))

    async def get_route(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/route/{uuid}"))

    # =========================================================================
    # Elements
    # =========================================================================
    async def create_element(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/element", params))

    async def update_element(self, uuid: str, data: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._put(f"/element/{uuid}", data))

    async def get_element(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/element/{uuid}"))

    async def get_element_tree(self, uuid: str) -> dict[str, Any]:
        return decode_tree(await self._get(f"/element/{uuid}/tree"))

    async def delete_element(self, uuid: str) -> dict[str, Any]:
        """Delete an element; Stellify cascades to its children."""
        return decode_deletion(await self._delete(f"/element/{uuid}"))

    async def search_elements(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_collection(await self._get("/element/search", params))

    async def html_to_elements(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_element_map(await self._post("/html/elements", params))

    # =========================================================================
    # Directories
    # =========================================================================
    async def create_directory(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/directory", params))

    async def get_directory(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/directory/{uuid}"))

    # =========================================================================
    # Globals (application-wide library)
    # =========================================================================
    async def list_globals(self) -> dict[str, Any]:
        return decode_collection(await self._get("/globals/"))

    async def get_global(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/globals/file/{uuid}"))

    async def install_global(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_payload(await self._post("/globals/install", params))

    async def search_global_methods(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_collection(await self._post("/method/search-global", params))

    # =========================================================================
    # Modules
    # =========================================================================
    async def list_modules(self) -> dict[str, Any]:
        return decode_collection(await self._get("/modules/"))

    async def get_module(self, uuid: str) -> dict[str, Any]:
        return decode_entity(await self._get(f"/modules/{uuid}"))

    async def create_module(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/modules/", params))

    async def add_file_to_module(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_payload(await self._post("/modules/add-file", params))

    async def remove_file_from_module(self, module_uuid: str, file_uuid: str) -> dict[str, Any]:
        return decode_deletion(await self._delete(f"/modules/{module_uuid}/file/{file_uuid}"))

    async def install_module(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_payload(await self._post("/modules/install", params))

    async def delete_module(self, uuid: str) -> dict[str, Any]:
        return decode_deletion(await self._delete(f"/modules/{uuid}"))

    # =========================================================================
    # Scaffolding, execution, capabilities, analysis
    # =========================================================================
    async def create_resources(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_payload(await self._post("/resources", params))

    async def run_code(self, params: dict[str, Any]) -> dict[str, Any]:
        """Execute a method on Stellify; `timeout` is enforced server-side."""
        return decode_payload(await self._post("/code/run", params))

    async def list_capabilities(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_collection(await self._get("/capabilities", params))

    async def request_capability(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_entity(await self._post("/capabilities/request", params))

    async def analyze_performance(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_payload(await self._post("/analysis/performance", params))

    async def analyze_quality(self, params: dict[str, Any]) -> dict[str, Any]:
        return decode_payload(await self._post("/analysis/quality", params))
