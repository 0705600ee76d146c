from __future__ import annotations

from typing import Any, Dict, List, Optional

import gradio as gr

from .errors import MalformedURL
from .io_utils import export_json_file, is_json_file, load_json_file
from .permissive import parse_json_like, parse_loose
from .query import decode_query, encode_query
from .strict import parse_strict
from .tables import QUERY_COLUMNS, export_excel, mapping_to_rows

PARSE_MODES = ["Auto", "Strict", "Permissive"]
PARAM_HEADERS = ["Key", "Value"]


def _clean_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        # empty Dataframe cells arrive as NaN
        return ""
    return value if isinstance(value, str) else str(value)


def rows_to_params(params_df) -> Dict[str, str]:
    """Read a Key/Value table (DataFrame or list of rows) into a mapping."""
    if params_df is None:
        return {}
    try:
        rows = list(zip(params_df["Key"], params_df["Value"]))
    except Exception:
        rows = [tuple(row[:2]) for row in params_df if len(row) >= 2]

    params: Dict[str, str] = {}
    for key, value in rows:
        key = _clean_cell(key).strip()
        if key:
            params[key] = _clean_cell(value)
    return params


async def parse_text_handler(text: str, mode: str = "Auto"):
    if not text or not text.strip():
        return None, None, "No text to parse.", gr.update(interactive=False)

    if mode == "Strict":
        result = parse_strict(text)
    elif mode == "Permissive":
        result = await parse_loose(text)
    else:
        result = await parse_json_like(text)

    if not result.ok:
        message = f"Could not parse text ({mode.lower()} mode)."
        if result.reason:
            message += f" {result.reason}"
        return None, None, message, gr.update(interactive=False)

    return result.value, result.value, f"Parsed successfully ({type(result.value).__name__}).", gr.update(interactive=True)


def load_file_handler(file_obj):
    if file_obj is None:
        return None, None, "No file uploaded.", gr.update(interactive=False)
    if not is_json_file(file_obj):
        return None, None, "Please select a .json file.", gr.update(interactive=False)

    result = load_json_file(file_obj)
    if not result.ok:
        return None, None, f"Error parsing JSON: {result.reason}", gr.update(interactive=False)
    return result.value, result.value, "Successfully loaded.", gr.update(interactive=True)


def export_parsed_handler(data, file_name: Optional[str] = None):
    if data is None:
        return None, "Nothing parsed yet."
    try:
        path = export_json_file(data, file_name)
    except (OSError, TypeError, ValueError) as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def encode_query_handler(url: str, params_df):
    params = rows_to_params(params_df)
    try:
        return encode_query(url, params), f"Set {len(params)} parameter(s)."
    except MalformedURL as e:
        return "", f"Error: {str(e)}"


def decode_query_handler(url: str, unquote_values: bool = False):
    params = decode_query(url or "", unquote_values=bool(unquote_values))
    rows: List[List[str]] = [[k, v] for k, v in params.items()]
    if not rows:
        return [], "No query parameters found."
    return rows, f"Found {len(rows)} parameter(s)."


def export_decoded_handler(rows, file_name: Optional[str] = None):
    params = rows_to_params(rows)
    if not params:
        return None, "No parameters to export."
    try:
        path = export_excel({"columns": QUERY_COLUMNS, "rows": mapping_to_rows(params)}, file_name)
    except OSError as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"
