"""Core logic for the JSON Query Toolkit.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- parse text strictly as JSON or leniently as JavaScript literals
- set query parameters on URLs and pull `key=value` pairs back out
- export parsed values and decoded parameters as files
"""
from __future__ import annotations

from .errors import EvaluationError, MalformedURL, ParseError, ToolkitError
from .permissive import parse_json_like, parse_loose
from .query import decode_query, encode_query, extract_filename_from_url
from .results import Err, Ok, ParseResult, try_await
from .strict import parse_strict

__all__ = [
    "Err",
    "EvaluationError",
    "MalformedURL",
    "Ok",
    "ParseError",
    "ParseResult",
    "ToolkitError",
    "decode_query",
    "encode_query",
    "extract_filename_from_url",
    "parse_json_like",
    "parse_loose",
    "parse_strict",
    "try_await",
]
