from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

from .config import get_settings
from .results import Err, ParseResult
from .strict import parse_strict

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = 'application/json'


def _file_name(file_obj) -> str:
    name = getattr(file_obj, 'name', file_obj)
    return name if isinstance(name, str) else ''


def is_json_file(file_obj) -> bool:
    """True when the upload looks like JSON by mime type or extension."""
    if file_obj is None:
        return False
    mime = getattr(file_obj, 'mime_type', None) or getattr(file_obj, 'content_type', None)
    if mime == JSON_MIME_TYPE:
        return True
    return _file_name(file_obj).lower().endswith('.json')


def read_text_content(file_obj) -> str:
    """Read text from an uploaded file object or a file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content

    path = _file_name(file_obj) or file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def load_json_file(file_obj) -> ParseResult[Any]:
    """Read and strictly parse a JSON upload. Read errors become ``Err`` too."""
    try:
        text = read_text_content(file_obj)
    except (OSError, ValueError, TypeError) as exc:
        logger.debug("Could not read JSON file: %s", exc)
        return Err(f"File read error: {exc}")
    return parse_strict(text)


def export_json_file(data: Any, file_name: Optional[str] = None, export_dir: Optional[str] = None) -> str:
    """Write ``data`` as JSON into the export directory and return the path."""
    file_name = (file_name or '').strip() or 'output'
    if not file_name.lower().endswith('.json'):
        file_name += '.json'

    target_dir = export_dir or get_settings().export_dir
    os.makedirs(target_dir, exist_ok=True)
    path = os.path.join(target_dir, os.path.basename(file_name))

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info("Exported JSON to %s", path)
    return path
