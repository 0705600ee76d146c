"""HTML table rendering and the ``.xls`` export that wraps it.

Spreadsheet applications open an HTML document saved with an ``.xls``
extension as a worksheet, so the "Excel" export is a styled HTML page with a
UTF-8 byte order mark in front (without it non-ASCII text shows up garbled).
"""
from __future__ import annotations

import html
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .config import get_settings

logger = logging.getLogger(__name__)

UTF8_BOM = '\ufeff'

HTML_START = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Export</title>
  <style>
    table {
      border-collapse: collapse;
      text-align: center;
    }
    table, td, th {
      border: 1px solid #000;
    }
    td, th {
      text-align: center;
      height: 40px;
      width: 200px;
    }
  </style>
</head>
<body>"""

HTML_END = """
</body>
</html>"""


@dataclass(frozen=True)
class Column:
    title: str
    data_index: str


QUERY_COLUMNS = (Column('Key', 'key'), Column('Value', 'value'))


def _as_column(col: Union[Column, Mapping[str, Any]]) -> Column:
    if isinstance(col, Column):
        return col
    return Column(str(col.get('title', '')), str(col.get('data_index', col.get('dataIndex', ''))))


def _cell(content: Any) -> str:
    return '' if content is None else html.escape(str(content))


def build_table_html(columns: Sequence[Union[Column, Mapping[str, Any]]], rows: Sequence[Mapping[str, Any]]) -> str:
    """Render rows as an HTML ``<table>``, one ``<td>`` per column."""
    cols = [_as_column(c) for c in columns]
    header_html = ''.join(f'<th scope="col">{_cell(c.title)}</th>' for c in cols)
    body_html = ''.join(
        '\n    <tr>\n      '
        + ''.join(f'<td>{_cell(row.get(c.data_index))}</td>' for c in cols)
        + '\n    </tr>'
        for row in rows
    )
    return f'<table><thead><tr>{header_html}</tr></thead><tbody>{body_html}</tbody></table>'


def mapping_to_rows(mapping: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Turn a query mapping into rows for ``QUERY_COLUMNS``."""
    return [{'key': k, 'value': v} for k, v in mapping.items()]


def export_excel(content: Union[str, Mapping[str, Any]], file_name: Optional[str] = None, export_dir: Optional[str] = None) -> str:
    """Write an HTML table as an ``.xls`` document and return the path.

    ``content`` is either a ready HTML fragment or a mapping with ``columns``
    and ``rows`` keys that is rendered with ``build_table_html``.
    """
    if isinstance(content, Mapping):
        fragment = build_table_html(content.get('columns') or [], content.get('rows') or [])
    else:
        fragment = content or ''

    file_name = (file_name or '').strip() or 'export'
    if not file_name.lower().endswith('.xls'):
        file_name += '.xls'

    target_dir = export_dir or get_settings().export_dir
    os.makedirs(target_dir, exist_ok=True)
    path = os.path.join(target_dir, os.path.basename(file_name))

    with open(path, 'w', encoding='utf-8') as f:
        f.write(UTF8_BOM + HTML_START + fragment + HTML_END)
    logger.info("Exported table to %s", path)
    return path
