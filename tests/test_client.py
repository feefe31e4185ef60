"""Tests for the Stellify HTTP client."""

import httpx
import pytest

from stellify_core.arguments import CreateMethodArgs, SearchFilesArgs
from stellify_core.client import StellifyClient
from stellify_core.errors import DecodeError, RemoteAPIError

from conftest import API_URL, request_json


async def test_bearer_token_and_json_headers(client, fake_api):
    fake_api.reply("GET", "/file/f-1", {"data": {"uuid": "f-1"}})

    await client.get_file("f-1")

    sent = fake_api.requests[0]
    assert sent.headers["Authorization"] == "Bearer test-token"
    assert sent.headers["Accept"] == "application/json"
    assert str(sent.url) == f"{API_URL}/file/f-1"


async def test_post_body_uses_remote_field_names(client, fake_api):
    fake_api.reply("POST", "/method", {"data": {"uuid": "m-1", "name": "add"}})
    args = CreateMethodArgs(
        file_uuid="f-1",
        name="add",
        return_type="int",
        parameters=[{"name": "a", "type": "int"}, {"name": "b", "type": "int"}],
    )

    result = await client.create_method(args.to_params())

    assert result == {"uuid": "m-1", "name": "add"}
    assert request_json(fake_api.requests[0]) == {
        "file": "f-1",
        "name": "add",
        "visibility": "public",
        "is_static": False,
        "returnType": "int",
        "parameters": [{"name": "a", "type": "int"}, {"name": "b", "type": "int"}],
    }


async def test_get_sends_query_params(client, fake_api):
    fake_api.reply("GET", "/file/search", {"data": [], "pagination": {"total": 0}})
    args = SearchFilesArgs(query="Calc", include_metadata=True, per_page=5)

    await client.search_files(args.to_params())

    params = fake_api.requests[0].url.params
    assert params["query"] == "Calc"
    assert params["include_metadata"] == "true"
    assert params["per_page"] == "5"
    assert "sort" not in params


async def test_update_element_puts_attributes(client, fake_api):
    fake_api.reply("PUT", "/element/e-1", {"data": {"uuid": "e-1", "tag": "form"}})

    await client.update_element("e-1", {"tag": "form", "classes": ["mx-auto"]})

    assert request_json(fake_api.requests[0]) == {"tag": "form", "classes": ["mx-auto"]}


async def test_remove_file_from_module_path(client, fake_api):
    fake_api.reply("DELETE", "/modules/mod-1/file/f-9", None, status=204)

    assert await client.remove_file_from_module("mod-1", "f-9") == {}


class TestFailures:
    async def test_http_error_keeps_remote_message_and_body(self, client, fake_api):
        body = {"message": "The name has already been taken.", "errors": {"name": ["taken"]}}
        fake_api.reply("POST", "/file", body, status=422)

        with pytest.raises(RemoteAPIError) as exc_info:
            await client.create_file({"name": "Widget", "type": "class", "project_id": "p"})

        assert exc_info.value.message == "The name has already been taken."
        assert exc_info.value.status_code == 422
        assert exc_info.value.detail == body

    async def test_http_error_without_message(self, client, fake_api):
        fake_api.on("GET", "/method/m-1", lambda request: httpx.Response(500, text="upstream exploded"))

        with pytest.raises(RemoteAPIError) as exc_info:
            await client.get_method("m-1")

        assert exc_info.value.message == "GET /method/m-1 failed with HTTP 500"
        assert exc_info.value.detail == "upstream exploded"

    async def test_unregistered_route_is_404(self, client):
        with pytest.raises(RemoteAPIError) as exc_info:
            await client.get_route("r-404")
        assert exc_info.value.status_code == 404

    async def test_transport_error(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with StellifyClient(API_URL, "t", transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(RemoteAPIError) as exc_info:
                await client.list_modules()

        assert exc_info.value.message == "Connection refused"
        assert exc_info.value.status_code is None

    async def test_non_json_success_body(self, client, fake_api):
        fake_api.on("GET", "/globals/", lambda request: httpx.Response(200, text="<html>login</html>"))

        with pytest.raises(DecodeError) as exc_info:
            await client.list_globals()
        assert exc_info.value.body == "<html>login</html>"

    async def test_wrong_shape_is_decode_error(self, client, fake_api):
        fake_api.reply("POST", "/route", {"uuid": "r-1"})

        with pytest.raises(DecodeError):
            await client.create_route({"name": "x"})
