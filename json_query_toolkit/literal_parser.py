"""Recursive-descent reader for JavaScript object-literal text.

Accepts a superset of JSON: unquoted and numeric keys, single-quoted strings,
trailing commas, array holes, comments, hex/octal/binary integers, signed
numbers, ``Infinity``, ``NaN`` and ``undefined``. Anything that is not a
literal (identifiers used as values, calls, operators, statements) is
rejected with ``EvaluationError``. Nothing in the input is ever executed.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List

from .config import DEFAULT_MAX_DEPTH
from .errors import EvaluationError

_KEYWORD_VALUES = {
    'true': True,
    'false': False,
    'null': None,
    'undefined': None,
    'Infinity': math.inf,
    'NaN': math.nan,
}

_SIMPLE_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    'v': '\v',
}

_LINE_TERMINATORS = '\n\r\u2028\u2029'
_DIGITS = '0123456789'
_HEX_DIGITS = '0123456789abcdefABCDEF'
_RADIX_PREFIXES = {'x': 16, 'o': 8, 'b': 2}


def _is_digit(ch: str) -> bool:
    return bool(ch) and ch in _DIGITS


def _is_ident_start(ch: str) -> bool:
    return bool(ch) and (ch.isalpha() or ch in '_$')


def _is_ident_part(ch: str) -> bool:
    return bool(ch) and (ch.isalnum() or ch in '_$')


def _number_to_key(value: Any) -> str:
    """Property name a numeric key turns into (``1.0`` -> ``'1'``, ``1e21`` -> ``'1e+21'``)."""
    if isinstance(value, int):
        # numeric keys are doubles before they become property names
        try:
            value = float(value)
        except OverflowError:
            return 'Infinity'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


class LiteralParser:
    """Single-use parser; build a new instance for every input."""

    def __init__(self, text: str, max_depth: int = DEFAULT_MAX_DEPTH):
        if not isinstance(text, str):
            raise EvaluationError(f"Expected text, got {type(text).__name__}")
        self.text = text
        self.pos = 0
        self.max_depth = max_depth

    def parse(self) -> Any:
        self._skip()
        if self._at_end():
            raise EvaluationError("Unexpected end of input", self.pos)
        value = self._value(0)
        self._skip()
        if self._peek() == ';':
            self.pos += 1
            self._skip()
        if not self._at_end():
            raise EvaluationError(f"Unexpected token {self._peek()!r}", self.pos)
        return value

    # -- scanning helpers -------------------------------------------------

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ''

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            found = self._peek() or 'end of input'
            raise EvaluationError(f"Expected {ch!r} but found {found!r}", self.pos)
        self.pos += 1

    def _skip(self) -> None:
        """Skip whitespace and comments."""
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace() or ch == '\ufeff':
                self.pos += 1
            elif text.startswith('//', self.pos):
                while self.pos < len(text) and text[self.pos] not in _LINE_TERMINATORS:
                    self.pos += 1
            elif text.startswith('/*', self.pos):
                end = text.find('*/', self.pos + 2)
                if end < 0:
                    raise EvaluationError("Unterminated comment", self.pos)
                self.pos = end + 2
            else:
                break

    # -- grammar ----------------------------------------------------------

    def _check_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            raise EvaluationError(f"Nesting deeper than {self.max_depth} levels", self.pos)

    def _value(self, depth: int) -> Any:
        self._check_depth(depth)

        ch = self._peek()
        if ch == '{':
            return self._object(depth + 1)
        if ch == '[':
            return self._array(depth + 1)
        if ch in ('"', "'"):
            return self._string()
        if ch == '(':
            self.pos += 1
            self._skip()
            value = self._value(depth + 1)
            self._skip()
            self._expect(')')
            return value
        if _is_digit(ch) or (ch and ch in '+-.'):
            return self._signed_number()
        if _is_ident_start(ch):
            start = self.pos
            name = self._identifier()
            if name in _KEYWORD_VALUES:
                return _KEYWORD_VALUES[name]
            raise EvaluationError(f"Unexpected identifier {name!r}", start)
        if not ch:
            raise EvaluationError("Unexpected end of input", self.pos)
        raise EvaluationError(f"Unexpected token {ch!r}", self.pos)

    def _object(self, depth: int) -> Dict[str, Any]:
        self._check_depth(depth)
        self._expect('{')
        result: Dict[str, Any] = {}
        while True:
            self._skip()
            if self._peek() == '}':
                self.pos += 1
                return result
            key = self._key()
            self._skip()
            self._expect(':')
            self._skip()
            result[key] = self._value(depth)
            self._skip()
            if self._peek() == ',':
                self.pos += 1
                continue
            self._expect('}')
            return result

    def _key(self) -> str:
        ch = self._peek()
        if ch in ('"', "'"):
            return self._string()
        if _is_digit(ch) or ch == '.':
            return _number_to_key(self._number())
        if _is_ident_start(ch):
            return self._identifier()
        if not ch:
            raise EvaluationError("Unexpected end of input", self.pos)
        raise EvaluationError(f"Unexpected token {ch!r} in object key", self.pos)

    def _array(self, depth: int) -> List[Any]:
        self._check_depth(depth)
        self._expect('[')
        items: List[Any] = []
        while True:
            self._skip()
            ch = self._peek()
            if ch == ']':
                self.pos += 1
                return items
            if ch == ',':
                # hole, e.g. [1,,2]
                items.append(None)
                self.pos += 1
                continue
            items.append(self._value(depth))
            self._skip()
            if self._peek() == ',':
                self.pos += 1
                continue
            self._expect(']')
            return items

    def _identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and _is_ident_part(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def _string(self) -> str:
        quote = self._peek()
        start = self.pos
        self.pos += 1
        out: List[str] = []
        while True:
            if self._at_end():
                raise EvaluationError("Unterminated string", start)
            ch = self.text[self.pos]
            if ch == quote:
                self.pos += 1
                return ''.join(out)
            if ch in '\n\r':
                raise EvaluationError("Unterminated string", start)
            if ch == '\\':
                self.pos += 1
                out.append(self._escape())
            else:
                out.append(ch)
                self.pos += 1

    def _escape(self) -> str:
        if self._at_end():
            raise EvaluationError("Unterminated string", self.pos)
        ch = self.text[self.pos]
        self.pos += 1

        if ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch]
        if ch == '\r':
            if self._peek() == '\n':
                self.pos += 1
            return ''
        if ch in _LINE_TERMINATORS:
            return ''
        if ch == 'x':
            return chr(self._hex_run(2))
        if ch == 'u':
            code = self._unicode_escape()
            # Join a UTF-16 surrogate pair into one code point.
            if 0xD800 <= code <= 0xDBFF and self.text.startswith('\\u', self.pos):
                saved = self.pos
                self.pos += 2
                low = self._unicode_escape()
                if 0xDC00 <= low <= 0xDFFF:
                    return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
                self.pos = saved
            return chr(code)
        if ch in '01234567':
            # Legacy octal escape: up to three digits, value below 256.
            digits = ch
            limit = 3 if ch in '0123' else 2
            while len(digits) < limit and self._peek() in tuple('01234567'):
                digits += self._peek()
                self.pos += 1
            return chr(int(digits, 8))
        return ch

    def _hex_run(self, count: int) -> int:
        digits = self.text[self.pos:self.pos + count]
        if len(digits) != count or any(d not in _HEX_DIGITS for d in digits):
            raise EvaluationError("Invalid hexadecimal escape sequence", self.pos)
        self.pos += count
        return int(digits, 16)

    def _unicode_escape(self) -> int:
        if self._peek() != '{':
            return self._hex_run(4)
        end = self.text.find('}', self.pos)
        digits = self.text[self.pos + 1:end] if end >= 0 else ''
        if not digits or any(d not in _HEX_DIGITS for d in digits):
            raise EvaluationError("Invalid Unicode escape sequence", self.pos)
        code = int(digits, 16)
        if code > 0x10FFFF:
            raise EvaluationError("Undefined Unicode code-point", self.pos)
        self.pos = end + 1
        return code

    def _signed_number(self) -> Any:
        sign = 1
        if self._peek() in '+-':
            sign = -1 if self._peek() == '-' else 1
            self.pos += 1
            self._skip()
            if _is_ident_start(self._peek()):
                start = self.pos
                name = self._identifier()
                if name in ('Infinity', 'NaN'):
                    return sign * _KEYWORD_VALUES[name]
                raise EvaluationError(f"Unexpected identifier {name!r}", start)
        value = self._number()
        return -value if sign < 0 else value

    def _number(self) -> Any:
        text = self.text
        start = self.pos

        if self._peek() == '0' and self._peek(1).lower() in _RADIX_PREFIXES:
            radix = _RADIX_PREFIXES[self._peek(1).lower()]
            self.pos += 2
            digits_start = self.pos
            while self._peek() and self._peek() in _HEX_DIGITS:
                self.pos += 1
            digits = text[digits_start:self.pos]
            if self._peek() == 'n':
                self.pos += 1
            if not digits or _is_ident_part(self._peek()):
                raise EvaluationError("Invalid number literal", start)
            try:
                return int(digits, radix)
            except ValueError:
                raise EvaluationError("Invalid number literal", start) from None

        while _is_digit(self._peek()):
            self.pos += 1
        int_part = text[start:self.pos]
        is_float = False

        if self._peek() == '.':
            is_float = True
            self.pos += 1
            while _is_digit(self._peek()):
                self.pos += 1
        if not any(c in _DIGITS for c in text[start:self.pos]):
            raise EvaluationError("Invalid number literal", start)
        if self._peek() in ('e', 'E'):
            is_float = True
            self.pos += 1
            if self._peek() in ('+', '-'):
                self.pos += 1
            if not _is_digit(self._peek()):
                raise EvaluationError("Invalid number literal", start)
            while _is_digit(self._peek()):
                self.pos += 1

        literal = text[start:self.pos]
        if not is_float and self._peek() == 'n':
            self.pos += 1
            try:
                value = int(literal)
            except ValueError:
                # beyond the interpreter's int string conversion limit
                raise EvaluationError("Invalid number literal", start) from None
        elif is_float:
            value = float(literal)
        elif len(int_part) > 1 and int_part[0] == '0' and all(c in '01234567' for c in int_part):
            # Legacy octal such as 017.
            value = int(int_part, 8)
        else:
            try:
                value = int(literal)
            except ValueError:
                # Too many digits for int(); JavaScript reads it as a double.
                value = float(literal)

        if _is_ident_part(self._peek()):
            raise EvaluationError("Identifier directly after number", self.pos)
        return value


def parse_literal(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Parse ``text`` as a JavaScript literal with a fresh parser."""
    return LiteralParser(text, max_depth=max_depth).parse()
