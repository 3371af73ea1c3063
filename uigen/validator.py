"""Structural validation of raw generation requests.

Turns an untrusted mapping (parsed JSON, CLI input, tool arguments) into a
:class:`~uigen.models.GenerationRequest`, or reports every problem as a
field-qualified :class:`~uigen.errors.FieldError`.  The validator never
consults the platform registry: whether a flag is supported on a given
platform is a degraded condition reported later, not a validation failure.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic.alias_generators import to_snake

from uigen.errors import FieldError, ValidationError
from uigen.models import GenerationRequest

_ROOT = "<root>"


def validate(raw: Any) -> GenerationRequest:
    """Validate *raw* and return an immutable request.

    Raises:
        ValidationError: Carrying one :class:`FieldError` per problem.
    """
    if isinstance(raw, GenerationRequest):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError([FieldError(_ROOT, "must be an object")])
    try:
        return GenerationRequest.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        raise ValidationError(_field_errors(exc)) from exc


def check(raw: Any) -> list[FieldError]:
    """Return every validation problem in *raw*; empty when valid."""
    try:
        validate(raw)
    except ValidationError as exc:
        return exc.errors
    return []


def _field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors():
        field = _format_loc(err.get("loc", ()))
        errors.append(FieldError(field, _format_message(err)))
    return errors


def _format_loc(loc: tuple[Any, ...]) -> str:
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            name = to_snake(str(part))
            parts.append(f".{name}" if parts else name)
    return "".join(parts) or _ROOT


def _format_message(err: Mapping[str, Any]) -> str:
    kind = err.get("type", "")
    ctx = err.get("ctx") or {}
    if kind == "enum":
        return f"must be one of {ctx.get('expected', '')}".rstrip()
    if kind == "missing":
        return "is required"
    if kind == "extra_forbidden":
        return "is not a recognised field"
    if kind == "bool_type" or kind == "bool_parsing":
        return "must be a boolean"
    if kind in ("model_type", "dict_type"):
        return "must be an object"
    if kind == "string_too_short":
        return "must not be empty"
    message = str(err.get("msg", "is invalid"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message
