"""Domain errors and the response bodies they map to."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class TimesplitError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def to_body(self) -> Dict[str, Any]:
        return {"ok": False, "error": str(self)}


class ValidationError(TimesplitError):
    """Malformed or invariant-violating input, with a field-level breakdown."""

    status_code = 400

    def __init__(
        self,
        field_errors: Optional[Dict[str, List[str]]] = None,
        form_errors: Optional[List[str]] = None,
    ) -> None:
        self.field_errors = field_errors or {}
        self.form_errors = form_errors or []
        super().__init__(self._summary())

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(field_errors={field: [message]})

    def _summary(self) -> str:
        parts = list(self.form_errors)
        for field, messages in self.field_errors.items():
            parts.extend(f"{field}: {message}" for message in messages)
        return "; ".join(parts) or "invalid payload"

    def to_dict(self) -> Dict[str, Any]:
        return {"formErrors": list(self.form_errors), "fieldErrors": dict(self.field_errors)}

    def to_body(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.to_dict()}


class NotFound(TimesplitError):
    status_code = 404

    def __init__(self, resource: str = "session", key: Any = None) -> None:
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} {key!r} not found" if key is not None else f"{resource} not found")

    def to_body(self) -> Dict[str, Any]:
        return {"error": "not_found"}


class Unauthorized(TimesplitError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("unauthorized")


class PersistenceError(TimesplitError):
    """Storage failure during a write; the transaction was rolled back."""

    status_code = 500


__all__ = [
    "NotFound",
    "PersistenceError",
    "TimesplitError",
    "Unauthorized",
    "ValidationError",
]
