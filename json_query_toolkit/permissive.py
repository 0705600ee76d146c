"""Lenient parsing of "JSON-ish" text.

``parse_loose`` reads JavaScript object-literal syntax (unquoted keys,
single quotes, trailing commas, comments) with ``LiteralParser``. The text is
parsed, never executed, so expressions, calls and loops are rejected rather
than run. Each call builds its own parser and shares nothing with other calls.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from .config import get_settings
from .errors import EvaluationError
from .literal_parser import LiteralParser
from .results import Err, Ok, ParseResult
from .strict import parse_strict

logger = logging.getLogger(__name__)


def _parse_in_fresh_scope(text: Any, max_depth: int) -> ParseResult[Any]:
    try:
        return Ok(LiteralParser(text, max_depth=max_depth).parse())
    except (EvaluationError, RecursionError, ValueError, OverflowError) as exc:
        logger.debug("Permissive parse failed: %s", exc)
        return Err(str(exc) or type(exc).__name__)


async def parse_loose(text: Any, max_depth: Optional[int] = None) -> ParseResult[Any]:
    """Parse JavaScript-literal text off the event loop.

    Returns ``Ok(value)`` (``value`` may be None for ``null``/``undefined``)
    or ``Err`` for anything that is not a literal.
    """
    depth = max_depth if max_depth is not None else get_settings().max_depth
    try:
        return await asyncio.to_thread(_parse_in_fresh_scope, text, depth)
    except RuntimeError as exc:
        # Executor unavailable, e.g. during interpreter shutdown.
        logger.warning("Could not schedule permissive parse: %s", exc)
        return Err(str(exc))


async def parse_json_like(text: Any, max_depth: Optional[int] = None) -> ParseResult[Any]:
    """Strict JSON first, JavaScript-literal grammar as the fallback."""
    result = parse_strict(text)
    if result.ok:
        return result
    return await parse_loose(text, max_depth=max_depth)
