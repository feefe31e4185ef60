"""Tests for the tool catalogue: declarations, schemas, and one call per tool."""

import json

import pytest

from stellify_core.models import ToolDescriptor
from stellify_tools.catalogue import STELLIFY_TOOLS, Catalogue, build_catalogue

ENTITY = {"data": {"uuid": "u-1", "name": "Thing"}}
COLLECTION = {"data": [{"uuid": "u-1"}, {"uuid": "u-2"}], "pagination": {"total": 2}}
REPORT = {"success": True}

# tool → (minimal arguments, expected verb, expected path, canned response body)
# A body of None means an empty 204 response.
MINIMAL_CALLS = {
    "create_file": ({"project_id": "p-1", "name": "Widget", "type": "class"}, "POST", "/file", ENTITY),
    "get_file": ({"file_uuid": "f-1"}, "GET", "/file/f-1", ENTITY),
    "search_files": ({"query": "Wid"}, "GET", "/file/search", COLLECTION),
    "create_method": ({"file_uuid": "f-1", "name": "add"}, "POST", "/method", ENTITY),
    "add_method_body": (
        {"file_uuid": "f-1", "method_uuid": "m-1", "code": "return $a + $b;"}, "POST", "/code", REPORT,
    ),
    "get_method": ({"method_uuid": "m-1"}, "GET", "/method/m-1", ENTITY),
    "search_methods": ({}, "GET", "/method/search", COLLECTION),
    "create_statement": ({"file_uuid": "f-1", "method_uuid": "m-1"}, "POST", "/statement", ENTITY),
    "add_statement_code": (
        {"file_uuid": "f-1", "statement_uuid": "s-1", "code": "$x = 1;"}, "POST", "/code", REPORT,
    ),
    "get_statement": ({"statement_uuid": "s-1"}, "GET", "/statement/s-1", ENTITY),
    "create_route": (
        {"project_id": "p-1", "name": "Contact", "path": "/contact", "method": "GET"}, "POST", "/route", ENTITY,
    ),
    "get_route": ({"route_uuid": "r-1"}, "GET", "/route/r-1", ENTITY),
    "create_element": ({"type": "s-wrapper", "page": "r-1"}, "POST", "/element", ENTITY),
    "update_element": ({"element_uuid": "e-1", "data": {"tag": "div"}}, "PUT", "/element/e-1", ENTITY),
    "get_element": ({"element_uuid": "e-1"}, "GET", "/element/e-1", ENTITY),
    "get_element_tree": (
        {"element_uuid": "e-1"}, "GET", "/element/e-1/tree",
        {"data": {"uuid": "e-1", "name": "Container", "children": [{"uuid": "e-2", "children": []}]}},
    ),
    "delete_element": ({"element_uuid": "e-1"}, "DELETE", "/element/e-1", {"deleted_count": 2}),
    "search_elements": ({}, "GET", "/element/search", COLLECTION),
    "html_to_elements": ({"elements": "<div></div>"}, "POST", "/html/elements", {"data": {"e-1": {"tag": "div"}}}),
    "create_directory": ({"project_id": "p-1", "name": "Services"}, "POST", "/directory", ENTITY),
    "get_directory": ({"directory_uuid": "d-1"}, "GET", "/directory/d-1", ENTITY),
    "list_globals": ({}, "GET", "/globals/", COLLECTION),
    "get_global": ({"file_uuid": "g-1"}, "GET", "/globals/file/g-1", ENTITY),
    "install_global": ({"file_uuid": "g-1", "directory_uuid": "d-1"}, "POST", "/globals/install", REPORT),
    "search_global_methods": ({"query": "slug"}, "POST", "/method/search-global", COLLECTION),
    "list_modules": ({}, "GET", "/modules/", COLLECTION),
    "get_module": ({"module_uuid": "mod-1"}, "GET", "/modules/mod-1", ENTITY),
    "create_module": ({"name": "Auth"}, "POST", "/modules/", ENTITY),
    "add_file_to_module": ({"module_uuid": "mod-1", "file_uuid": "g-1"}, "POST", "/modules/add-file", REPORT),
    "remove_file_from_module": (
        {"module_uuid": "mod-1", "file_uuid": "g-1"}, "DELETE", "/modules/mod-1/file/g-1", None,
    ),
    "install_module": ({"module_uuid": "mod-1", "directory_uuid": "d-1"}, "POST", "/modules/install", REPORT),
    "delete_module": ({"module_uuid": "mod-1"}, "DELETE", "/modules/mod-1", {"deleted_count": 1}),
    "create_resources": ({"project_id": "p-1", "name": "Invoice"}, "POST", "/resources", REPORT),
    "run_code": ({"file_uuid": "f-1", "method_uuid": "m-1"}, "POST", "/code/run", {"output": "3"}),
    "list_capabilities": ({}, "GET", "/capabilities", COLLECTION),
    "request_capability": (
        {"name": "pdf", "description": "Render PDFs"}, "POST", "/capabilities/request", ENTITY,
    ),
    "analyze_performance": ({"file_uuid": "f-1"}, "POST", "/analysis/performance", {"issues": []}),
    "analyze_quality": ({"file_uuid": "f-1"}, "POST", "/analysis/quality", {"score": 9}),
}


class TestCatalogue:
    def test_every_tool_has_a_minimal_call(self, catalogue):
        assert set(catalogue.names()) == set(MINIMAL_CALLS)

    def test_names_are_unique(self):
        names = [spec.name for spec in STELLIFY_TOOLS]
        assert len(names) == len(set(names))

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="create_file"):
            Catalogue([STELLIFY_TOOLS[0], STELLIFY_TOOLS[0]])

    def test_descriptors_are_stable(self, catalogue):
        first = catalogue.descriptors()
        first_dump = json.dumps([d.to_dict() for d in first], sort_keys=True)

        with pytest.raises(TypeError):
            first[0].input_schema["properties"]["injected"] = {}
        with pytest.raises(AttributeError):
            first[0].input_schema["properties"].clear()
        first[0].to_dict()["inputSchema"]["properties"].clear()

        second = catalogue.descriptors()
        assert second is first
        assert json.dumps([d.to_dict() for d in second], sort_keys=True) == first_dump

    def test_descriptors_compare_by_schema(self):
        one = ToolDescriptor("t", "d", {"type": "object", "required": ["a"]})
        same = ToolDescriptor("t", "d", {"type": "object", "required": ["a"]})
        other = ToolDescriptor("t", "d", {"type": "object", "required": ["b"]})

        assert one == same
        assert one != other
        assert hash(one) == hash(other)

    def test_independent_instances(self):
        one, two = build_catalogue(), build_catalogue()
        assert one is not two
        assert one.names() == two.names()

    def test_unknown_lookup(self, catalogue):
        assert catalogue.get("drop_database") is None
        assert "drop_database" not in catalogue

    def test_every_tool_has_a_description(self, catalogue):
        for descriptor in catalogue.descriptors():
            assert descriptor.description.strip(), descriptor.name


class TestSchemas:
    def test_required_fields(self, catalogue):
        schema = catalogue.get("create_file").input_schema()

        assert schema["type"] == "object"
        assert set(schema["required"]) == {"project_id", "name", "type"}
        assert "title" not in schema

    def test_enum_is_advertised(self, catalogue):
        schema = catalogue.get("create_file").input_schema()
        assert schema["properties"]["type"]["enum"] == ["class", "model", "controller", "middleware"]

    def test_schema_uses_canonical_names(self, catalogue):
        # Callers pass file_uuid / return_type; the remote aliases never leak.
        properties = catalogue.get("create_method").input_schema()["properties"]

        assert "file_uuid" in properties
        assert "return_type" in properties
        assert "file" not in properties
        assert "returnType" not in properties

    def test_argumentless_tool(self, catalogue):
        schema = catalogue.get("list_modules").input_schema()
        assert schema.get("properties", {}) == {}
        assert "required" not in schema


@pytest.mark.parametrize("tool", sorted(MINIMAL_CALLS))
async def test_minimal_call_succeeds(tool, dispatcher, fake_api):
    arguments, verb, path, body = MINIMAL_CALLS[tool]
    fake_api.reply(verb, path, body, status=204 if body is None else 200)

    result = await dispatcher.dispatch(tool, arguments)

    assert result.success is True, result.to_dict()
    assert result.message
    assert len(fake_api.requests) == 1
    assert len(fake_api.calls(verb, path)) == 1
