"""Service layer helpers."""

from .merge import MergeResult, merge_session
from .validation import ParseFailure, ParseResult, ParseSuccess, parse_session_payload

__all__ = [
    "MergeResult",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "merge_session",
    "parse_session_payload",
]
