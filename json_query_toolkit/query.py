from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, unquote, unquote_plus, urlencode, urljoin, urlsplit, urlunsplit

from .config import get_settings
from .errors import MalformedURL

logger = logging.getLogger(__name__)

_HIERARCHICAL_SCHEMES = ('http', 'https', 'ftp', 'ws', 'wss')
_QUERY_DELIMITERS = '?&='
DEFAULT_DOWNLOAD_NAME = 'downloaded_file'


def stringify_value(value: Any) -> str:
    """Render a parameter value the way a browser's ``String(value)`` would."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ','.join('' if v is None else stringify_value(v) for v in value)
    return str(value)


def _split(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a bad port
    except ValueError as exc:
        raise MalformedURL(f"Invalid URL {url!r}: {exc}") from exc
    return parts


def _resolve_url(url: Any, base: Optional[str]) -> SplitResult:
    if not isinstance(url, str) or not url.strip():
        raise MalformedURL(f"Invalid URL {url!r}")
    url = url.strip()
    parts = _split(url)

    if not parts.scheme:
        if base is None:
            base = get_settings().base_url
        if base:
            try:
                url = urljoin(base, url)
            except ValueError as exc:
                raise MalformedURL(f"Cannot resolve {url!r} against {base!r}: {exc}") from exc
            parts = _split(url)
        if not parts.scheme and not url.startswith('/'):
            raise MalformedURL(f"Invalid URL {url!r}: not absolute and no base URL configured")

    if parts.scheme.lower() in _HIERARCHICAL_SCHEMES and not parts.hostname:
        raise MalformedURL(f"Invalid URL {url!r}: missing host")
    return parts


def _set_param(pairs: List[Tuple[str, str]], key: str, value: str) -> List[Tuple[str, str]]:
    """Overwrite the first ``key`` in place and drop later duplicates, or append."""
    for idx, (existing, _) in enumerate(pairs):
        if existing == key:
            head = pairs[:idx] + [(key, value)]
            tail = [p for p in pairs[idx + 1:] if p[0] != key]
            return head + tail
    return pairs + [(key, value)]


def encode_query(url: str, params: Optional[Mapping[str, Any]], base: Optional[str] = None) -> str:
    """Set each entry of ``params`` as a query parameter on ``url``.

    Existing parameters keep their position; keys already present are
    overwritten, new keys are appended in ``params`` order. Scheme, host,
    path and fragment are left as they are.

    Raises:
        MalformedURL: ``url`` is not an absolute URL or an origin-relative
            path, and cannot be resolved against ``base``.
    """
    try:
        parts = _resolve_url(url, base)
    except MalformedURL as exc:
        logger.warning("%s", exc)
        raise

    if not params:
        return urlunsplit(parts)

    pairs = parse_qsl(parts.query, keep_blank_values=True)
    for key, value in params.items():
        pairs = _set_param(pairs, str(key), stringify_value(value))

    path = parts.path
    if not path and parts.netloc and parts.scheme.lower() in _HIERARCHICAL_SCHEMES:
        path = '/'
    return urlunsplit(parts._replace(path=path, query=urlencode(pairs)))


def decode_query(url: Any, unquote_values: bool = False) -> Dict[str, str]:
    """Collect ``key=value`` tokens from query-like text.

    A key is a run of characters other than ``?``, ``&`` and ``=`` that is
    directly followed by ``=``; the value runs to the next ``&`` or the end
    of the text. Later keys overwrite earlier ones. The whole string is
    scanned, so ``key=value`` text inside a path or fragment is picked up too.
    Never raises; text without tokens gives ``{}``.
    """
    params: Dict[str, str] = {}
    if not isinstance(url, str):
        return params

    i = 0
    n = len(url)
    while i < n:
        if url[i] in _QUERY_DELIMITERS:
            i += 1
            continue

        key_start = i
        while i < n and url[i] not in _QUERY_DELIMITERS:
            i += 1
        if i >= n or url[i] != '=':
            # key run ended at '?', '&' or end of text: not a token
            continue

        key = url[key_start:i]
        value_start = i + 1
        value_end = url.find('&', value_start)
        if value_end < 0:
            value_end = n
        value = url[value_start:value_end]

        if unquote_values:
            key, value = unquote_plus(key), unquote_plus(value)
        params[key] = value
        i = value_end

    return params


def extract_filename_from_url(url: str) -> str:
    """Last path segment of ``url``, or ``downloaded_file`` when it is empty."""
    parts = _split(url) if isinstance(url, str) else None
    if parts is None:
        raise MalformedURL(f"Invalid URL {url!r}")
    name = unquote(parts.path.rsplit('/', 1)[-1])
    return name or DEFAULT_DOWNLOAD_NAME
