"""Typed parsing of raw ingestion payloads."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ValidationError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class FieldViolation:
    """One failed constraint, located by a dotted path such as ``allpicks.1.round``."""

    path: str
    message: str


@dataclass(frozen=True)
class ParseOk(Generic[ModelT]):
    value: ModelT


@dataclass(frozen=True)
class ParseError:
    """Why a payload was rejected.

    ``malformed`` means the body was not JSON at all; ``invalid`` means it was
    JSON that failed the schema, with details in ``violations``.
    """

    kind: Literal["malformed", "invalid"]
    message: str
    detail: str | None = None
    violations: tuple[FieldViolation, ...] = ()


ParseResult = Union[ParseOk[ModelT], ParseError]


def _violations(exc: ValidationError) -> tuple[FieldViolation, ...]:
    return tuple(
        FieldViolation(
            path=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
        )
        for error in exc.errors()
    )


def validate_payload(model: type[ModelT], data: object) -> ParseResult[ModelT]:
    """Validate already-decoded JSON against ``model``.

    Validation is strict: JSON types must match the fields, so ``"3"`` is not
    an int and ``"yes"`` is not a bool.
    """

    try:
        return ParseOk(model.model_validate(data, strict=True))
    except ValidationError as exc:
        violations = _violations(exc)
        logger.warning(
            "Rejected %s payload with %d validation error(s): %s",
            model.__name__,
            len(violations),
            "; ".join(f"{item.path}: {item.message}" for item in violations[:5]),
        )
        return ParseError(kind="invalid", message="Data validation failed", violations=violations)


def parse_payload(model: type[ModelT], raw: bytes | str) -> ParseResult[ModelT]:
    """Decode ``raw`` as JSON, then validate it against ``model``.

    Nothing here raises for bad input; callers branch on the result type.
    """

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Rejected %s payload: body is not valid JSON (%s)", model.__name__, exc)
        return ParseError(kind="malformed", message="Invalid JSON format", detail=str(exc))
    return validate_payload(model, data)
