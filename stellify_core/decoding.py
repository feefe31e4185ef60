# =============================================================================
# stellify_core/decoding.py  -  Response Decoders
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every client method runs the parsed JSON body through exactly one of the
#   decoders below.  A decoder either returns the part of the body the tool
#   reports back, or raises DecodeError.  There is no "data or else the
#   whole body" guessing: a malformed response is an error, distinct from a
#   legitimately empty result.
#
# SHAPES THE STELLIFY API RETURNS:
#
#   entity       {"data": {"uuid": "...", ...}}
#   tree         {"data": {"uuid": "...", "children": [...]}}
#   collection   {"data": [...], "pagination": {...}}      pagination optional
#   element map  {"data": {"<uuid>": {...}, ...}}
#   deletion     {"deleted_count": 1, ...}  or an empty 204 body
#   payload      any JSON object (code parsing, installs, analysis reports)
# =============================================================================

from typing import Any

from stellify_core.errors import DecodeError


def _require_object(body: Any, what: str) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(body).__name__}", body=body)
    return body


def _require_data(body: Any, what: str) -> Any:
    body = _require_object(body, what)
    if "data" not in body:
        raise DecodeError(f'Expected a "data" field for {what}', body=body)
    return body["data"]


def decode_entity(body: Any) -> dict[str, Any]:
    """A single remote entity, identified by its uuid."""
    data = _require_data(body, "an entity")
    if not isinstance(data, dict) or not data.get("uuid"):
        raise DecodeError('Expected "data" to be an object with a "uuid"', body=body)
    return data


def decode_tree(body: Any) -> dict[str, Any]:
    """An element with its (possibly empty) list of nested children."""
    data = decode_entity(body)
    pending = [data]
    while pending:
        node = pending.pop()
        children = node.get("children") or []
        if not isinstance(children, list) or not all(isinstance(c, dict) for c in children):
            raise DecodeError('Expected "children" to be a list of elements', body=body)
        pending.extend(children)
    return data


def decode_collection(body: Any) -> dict[str, Any]:
    """A list of results plus the API's pagination block, if any."""
    data = _require_data(body, "a collection")
    if not isinstance(data, list):
        raise DecodeError('Expected "data" to be a list', body=body)

    pagination = body.get("pagination")
    if pagination is not None and not isinstance(pagination, dict):
        raise DecodeError('Expected "pagination" to be an object', body=body)
    return {"items": data, "pagination": pagination}


def decode_element_map(body: Any) -> dict[str, Any]:
    """Elements produced by an HTML conversion, keyed by uuid."""
    data = _require_data(body, "an element map")
    if not isinstance(data, dict):
        raise DecodeError('Expected "data" to map element uuids to elements', body=body)
    for uuid, element in data.items():
        if not isinstance(element, dict):
            raise DecodeError(f"Element {uuid!r} is not an object", body=body)
    return data


def decode_deletion(body: Any) -> dict[str, Any]:
    """Acknowledgement of a delete; an empty body counts as success."""
    body = _require_object(body, "a deletion")
    count = body.get("deleted_count")
    if count is not None and not isinstance(count, int):
        raise DecodeError('Expected "deleted_count" to be an integer', body=body)
    return body


def decode_payload(body: Any) -> dict[str, Any]:
    """Endpoints whose report format is owned entirely by the API."""
    return _require_object(body, "a payload")
