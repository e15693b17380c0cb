"""Session payload parsing and cross-field checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..schemas import SessionPayload


@dataclass(frozen=True)
class ParseSuccess:
    payload: SessionPayload
    ok: Literal[True] = True


@dataclass(frozen=True)
class ParseFailure:
    error: ValidationError
    ok: Literal[False] = False


ParseResult = Union[ParseSuccess, ParseFailure]


def _flatten(exc: PydanticValidationError) -> ValidationError:
    """Group pydantic errors by top-level field, keeping nested paths in the message."""

    field_errors: Dict[str, List[str]] = {}
    form_errors: List[str] = []
    for item in exc.errors():
        loc = item.get("loc") or ()
        message = item.get("msg", "invalid")
        if not loc:
            form_errors.append(message)
            continue
        field = str(loc[0])
        if len(loc) > 1:
            message = "{}: {}".format(".".join(str(part) for part in loc), message)
        field_errors.setdefault(field, []).append(message)
    return ValidationError(field_errors=field_errors, form_errors=form_errors)


def parse_session_payload(raw: Any) -> ParseResult:
    """Validate shape first, then that the duration covers every submitted split.

    Only the splits present in ``raw`` are considered; previously stored
    splits for the same id are not consulted.
    """

    try:
        payload = SessionPayload.model_validate(raw)
    except PydanticValidationError as exc:
        return ParseFailure(_flatten(exc))

    max_t = payload.max_split_t
    if payload.duration_ms < max_t:
        return ParseFailure(
            ValidationError.for_field(
                "durationMs", f"durationMs must be >= max split.t ({max_t})"
            )
        )
    return ParseSuccess(payload)


__all__ = ["ParseFailure", "ParseResult", "ParseSuccess", "parse_session_payload"]
