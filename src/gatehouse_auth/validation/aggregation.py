"""Aggregation of field validation failures into one caller-safe error.

Validation failures arrive as an error tree: a mapping from field name to
either a message, a nested mapping (a sub-structure) or a mapping keyed by
list index (a list of sub-structures). ``flatten_errors`` walks that tree
and produces a flat mapping keyed by field path::

    {"username": "...", "profile": {"age": "..."}, "addresses": {0: {"street": "..."}}}

becomes::

    {"username": "...", "profile.age": "...", "addresses[0].street": "..."}

``from_validation_errors`` turns pydantic's error list into an ``AppError``:
structural problems (missing fields, wrong types, malformed JSON) are a
``BadRequest``; rule violations are ``ValidationFailed`` whose message is
the JSON-encoded flat mapping.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, Union

from gatehouse_auth.errors import AppError, bad_request, validation_failed

ErrorTree = Mapping[Union[str, int], Union[str, "ErrorTree"]]

ROOT_FIELD = "__root__"

_STRUCTURAL_ERROR_TYPES = frozenset(
    {
        "missing",
        "json_invalid",
        "extra_forbidden",
        "model_attributes_type",
    },
)

_MESSAGE_PREFIXES = ("Value error, ", "Assertion failed, ")


def flatten_errors(errors: ErrorTree, path: str | None = None) -> dict[str, str]:
    """Flatten a nested error tree into ``field path -> message``.

    Parameters
    ----------
    errors
        Error tree. String keys are fields, integer keys are list indexes.
    path
        Path of the enclosing field, None at the root

    Returns
    -------
    Flat mapping from dotted/bracketed field path to message
    """
    flat: dict[str, str] = {}

    for key, value in errors.items():
        if isinstance(key, int):
            field_path = f"{path or ''}[{key}]"
        else:
            field_path = f"{path}.{key}" if path else key

        if isinstance(value, Mapping):
            flat.update(flatten_errors(value, field_path))
        else:
            flat[field_path] = value

    return flat


def error_tree_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> dict:
    """Fold pydantic error dicts (``loc`` tuples) into an error tree.

    The first message reported for a field wins.
    """
    tree: dict = {}

    for error in errors:
        loc = tuple(error.get("loc", ())) or (ROOT_FIELD,)
        node = tree
        for part in loc[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                # The enclosing field already failed as a whole
                break
            node = child
        else:
            node.setdefault(loc[-1], _clean_message(error.get("msg", "")))

    return tree


def is_structural_error(error: Mapping[str, Any]) -> bool:
    """True for failures that mean the payload itself is malformed."""
    error_type = str(error.get("type", ""))
    return (
        error_type in _STRUCTURAL_ERROR_TYPES
        or error_type.endswith("_type")
        or error_type.endswith("_parsing")
    )


def from_validation_errors(errors: Iterable[Mapping[str, Any]]) -> AppError:
    """Classify pydantic validation errors into one ``AppError``.

    Parameters
    ----------
    errors
        Error dicts as returned by ``ValidationError.errors()``, with the
        request source (``body``, ``query``...) already stripped from ``loc``

    Returns
    -------
    BadRequest for structural failures, ValidationFailed otherwise
    """
    errors = list(errors)

    for error in errors:
        if is_structural_error(error):
            return bad_request(_describe_structural_error(error))

    flat = flatten_errors(error_tree_from_pydantic(errors))
    return validation_failed(json.dumps(flat))


def _describe_structural_error(error: Mapping[str, Any]) -> str:
    error_type = error.get("type")
    field = flatten_path(error.get("loc", ()))

    if error_type == "json_invalid":
        return "Malformed JSON payload"
    if error_type == "missing":
        return f"Missing field `{field}`" if field else "Missing request payload"
    if error_type == "extra_forbidden":
        return f"Unknown field `{field}`"
    if not field:
        return f"Invalid payload: {_clean_message(error.get('msg', ''))}"
    return f"Invalid type for field `{field}`: {_clean_message(error.get('msg', ''))}"


def flatten_path(loc: Iterable[str | int]) -> str:
    """Render a single ``loc`` tuple as a field path."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path = f"{path}[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _clean_message(message: str) -> str:
    for prefix in _MESSAGE_PREFIXES:
        if message.startswith(prefix):
            return message[len(prefix) :]
    return message
