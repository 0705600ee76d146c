from __future__ import annotations

import json
import logging
from typing import Any

from .errors import ParseError
from .results import Err, Ok, ParseResult

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _decode(text: Any) -> Any:
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8")
    if not isinstance(text, str):
        raise ParseError(f"Expected text, got {type(text).__name__}")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise ParseError(str(exc)) from exc


def parse_strict(text: Any) -> ParseResult[Any]:
    """Decode canonical JSON. Returns ``Err`` instead of raising on bad input."""
    try:
        return Ok(_decode(text))
    except (ParseError, UnicodeDecodeError) as exc:
        logger.debug("Strict JSON parse failed: %s", exc)
        return Err(str(exc))
