"""
Strict recursive-descent JSON decoder.

Converts JSON text into Python values with a small pipeline of mutually
recursive productions. Every production takes an immutable cursor and returns
the decoded value together with a new cursor positioned after it, so nested
containers compose without shared position state.
"""

import logging
import os
import re
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from typing import Final

__version__ = "0.1.0"

logger = logging.getLogger("rdjson")

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
type Position = int

# Union type for values that might be transformed by hooks
JsonValueOrTransformed = JsonValue | Any

# Hook type definitions - hooks can return custom types
ObjectHook = Callable[[dict[str, JsonValue]], Any] | None
ObjectPairsHook = (
    Callable[[list[tuple[str, JsonValueOrTransformed]]], Any] | None
)
ParseFloatHook = Callable[[str], Any] | None
ParseIntHook = Callable[[str], Any] | None

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "RDJSON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during decoding."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a function call with timing and character processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}
    _hot_path_stats_lock = threading.Lock()

    class ProfileContext:
        """
        Context manager for profiling hot paths.

        Productions set ``chars`` to the length they consumed before leaving
        the block. Updates to the shared table are serialized, so counts from
        concurrent decodes add up exactly.
        """

        def __init__(self, func_name: str, chars: int = 0) -> None:
            self.func_name = func_name
            self.chars = chars
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            with _hot_path_stats_lock:
                stats = _hot_path_stats.setdefault(
                    self.func_name, HotPathStats(self.func_name)
                )
                stats.record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        with _hot_path_stats_lock:
            return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        with _hot_path_stats_lock:
            _hot_path_stats.clear()

    def log_hot_path_stats(level: int = logging.DEBUG) -> None:
        """Logs collected statistics, slowest production first."""
        ranked = sorted(
            get_hot_path_stats().values(),
            key=lambda stats: stats.total_time_ns,
            reverse=True,
        )
        for stats in ranked:
            logger.log(
                level,
                "%s: %d calls, %.3f ms, %d chars",
                stats.function_name,
                stats.call_count,
                stats.total_time_ns / 1_000_000,
                stats.chars_processed,
            )

else:
    # Zero-cost in production - ignore arguments
    class ProfileContext:  # type: ignore[no-redef]
        chars = 0

        def __init__(self, func_name: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass

    def log_hot_path_stats(level: int = logging.DEBUG) -> None:
        pass


class JSONDecodeError(ValueError):
    """
    Base class for decoding failures, with position and line/column info.

    ``byte_pos`` is only filled in when the document was handed over as
    bytes; it is the UTF-8 offset matching ``pos``.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.byte_pos: Position | None = None

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")


_EXCERPT_LIMIT: Final = 32


class UnexpectedTokenError(JSONDecodeError):
    """
    The next token matches no grammar production expected at its position.

    ``remaining`` holds the unconsumed input starting at the offending
    character and ``token`` that character alone.
    """

    def __init__(self, doc: str, pos: Position) -> None:
        self.remaining = doc[pos:]
        self.token = self.remaining[:1]

        excerpt = self.remaining[:_EXCERPT_LIMIT]
        if len(self.remaining) > _EXCERPT_LIMIT:
            excerpt += "..."
        super().__init__(
            f"Invalid JSON - unexpected token >>{excerpt}<<", doc, pos
        )


class UnexpectedEndOfBufferError(JSONDecodeError):
    """Input ran out while a production still expected characters."""

    def __init__(self, doc: str) -> None:
        super().__init__(
            "Invalid JSON - unexpected end of buffer", doc, len(doc)
        )


@dataclass(frozen=True, slots=True)
class Cursor:
    """
    Immutable view over the unconsumed suffix of a document.

    Productions never move a cursor in place; they return a new one. Offsets
    count code points, so a cursor cannot sit inside a multi-byte character.
    """

    text: str
    pos: Position = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def remaining(self) -> str:
        return self.text[self.pos :]

    def peek(self) -> str:
        """Returns the current character, or an empty string at the end."""
        return self.text[self.pos : self.pos + 1]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def advance(self, count: int = 1) -> "Cursor":
        """Returns a cursor ``count`` characters further, clamped to the end."""
        return Cursor(self.text, min(self.pos + count, len(self.text)))

    def advance_to(self, pos: Position) -> "Cursor":
        if pos < self.pos:
            raise ValueError("cursor cannot move backwards")
        return Cursor(self.text, min(pos, len(self.text)))


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures decoding behavior with immutable settings.

    Hooks replace the default construction of numbers and objects;
    ``allow_scalar_root`` also admits numbers and literals as the outermost
    value.
    """

    parse_float: ParseFloatHook = None
    parse_int: ParseIntHook = None
    object_pairs_hook: ObjectPairsHook = None
    object_hook: ObjectHook = None
    allow_scalar_root: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.allow_scalar_root, bool):
            raise TypeError("allow_scalar_root must be a boolean")
        for name in (
            "parse_float",
            "parse_int",
            "object_pairs_hook",
            "object_hook",
        ):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise TypeError(f"{name} must be callable")


_DEFAULT_CONFIG: Final = ParseConfig()

_WHITESPACE: Final = re.compile(r"[ \t\n\r]*")
_STRING_CHUNK: Final = re.compile(r'([^"\\]*)(["\\])')
_DIGITS: Final = frozenset("0123456789")
_HEX_DIGITS: Final = frozenset("0123456789abcdefABCDEF")
_HIGH_SURROGATES: Final = range(0xD800, 0xDC00)
_LOW_SURROGATES: Final = range(0xDC00, 0xE000)

_ESCAPES: Final = MappingProxyType(
    {
        '"': '"',
        "\\": "\\",
        "/": "/",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
    }
)

_LITERALS: Final = {
    "t": ("true", True),
    "f": ("false", False),
    "n": ("null", None),
}


def _unexpected(cursor: Cursor) -> JSONDecodeError:
    """Picks the error for a mismatch at ``cursor``."""
    if cursor.at_end:
        return UnexpectedEndOfBufferError(cursor.text)
    return UnexpectedTokenError(cursor.text, cursor.pos)


def _expect(cursor: Cursor, delimiter: str) -> Cursor:
    if cursor.peek() != delimiter:
        raise _unexpected(cursor)
    return cursor.advance()


def skip_whitespace(cursor: Cursor) -> Cursor:
    """
    Skips space, tab, carriage return and line feed characters.

    Returns the very same cursor when no whitespace leads. Never fails.
    """
    with ProfileContext("skip_whitespace") as profile:
        match = _WHITESPACE.match(cursor.text, cursor.pos)
        end = match.end() if match else cursor.pos
        profile.chars = end - cursor.pos
        return cursor if end == cursor.pos else cursor.advance_to(end)


def _read_hex_quad(text: str, pos: Position) -> int:
    """Reads the four hex digits of a unicode escape starting at ``pos``."""
    code_point = 0
    for offset in range(pos, pos + 4):
        if offset >= len(text):
            raise UnexpectedEndOfBufferError(text)
        digit = text[offset]
        if digit not in _HEX_DIGITS:
            raise UnexpectedTokenError(text, offset)
        code_point = code_point * 16 + int(digit, 16)
    return code_point


def _decode_unicode_escape(text: str, start: Position) -> tuple[str, Position]:
    """
    Decodes the ``\\uXXXX`` escape at ``start``.

    A high surrogate must be followed by a low surrogate escape; the pair is
    joined into one supplementary character. Unpaired surrogates of either
    kind are rejected at the escape that opened them.
    """
    code_point = _read_hex_quad(text, start + 2)
    end = start + 6

    if code_point in _LOW_SURROGATES:
        raise UnexpectedTokenError(text, start)

    if code_point in _HIGH_SURROGATES:
        follower = text[end : end + 2]
        if follower == "\\u":
            low = _read_hex_quad(text, end + 2)
            if low in _LOW_SURROGATES:
                combined = 0x10000 + (
                    (code_point - 0xD800) << 10 | (low - 0xDC00)
                )
                return chr(combined), end + 6
        elif len(follower) < 2 and "\\u".startswith(follower):
            raise UnexpectedEndOfBufferError(text)
        raise UnexpectedTokenError(text, start)

    return chr(code_point), end


def decode_string(
    cursor: Cursor, _config: ParseConfig = _DEFAULT_CONFIG
) -> tuple[str, Cursor]:
    """
    Decodes a double-quoted string starting at ``cursor``.

    Recognized escapes map through the escape table and ``\\uXXXX`` becomes
    the code point it names. Any other escape is kept verbatim, backslash
    included, and raw characters are copied as they are.
    """
    with ProfileContext("decode_string") as profile:
        if cursor.peek() != '"':
            raise _unexpected(cursor)

        text = cursor.text
        pos = cursor.pos + 1
        chunks: list[str] = []

        while True:
            chunk = _STRING_CHUNK.match(text, pos)
            if chunk is None:
                raise UnexpectedEndOfBufferError(text)

            content, terminator = chunk.groups()
            if content:
                chunks.append(content)
            pos = chunk.end()

            if terminator == '"':
                profile.chars = pos - cursor.pos
                return "".join(chunks), cursor.advance_to(pos)

            escaped = text[pos : pos + 1]
            if not escaped:
                raise UnexpectedEndOfBufferError(text)

            if escaped == "u":
                char, pos = _decode_unicode_escape(text, pos - 1)
                chunks.append(char)
            elif escaped in _ESCAPES:
                chunks.append(_ESCAPES[escaped])
                pos += 1
            else:
                # Unknown escape: keep the backslash, the next chunk picks
                # up the escaped character as plain content.
                chunks.append("\\")


def _scan_digits(text: str, pos: Position) -> Position:
    """Scans one or more ASCII digits and returns the position after them."""
    if pos >= len(text):
        raise UnexpectedEndOfBufferError(text)
    if text[pos] not in _DIGITS:
        raise UnexpectedTokenError(text, pos)

    pos += 1
    while pos < len(text) and text[pos] in _DIGITS:
        pos += 1
    return pos


def _convert_number(
    literal: str, is_integer: bool, config: ParseConfig, cursor: Cursor
) -> JsonValueOrTransformed:
    if not is_integer:
        if config.parse_float:
            return config.parse_float(literal)
        return float(literal)

    if config.parse_int:
        return config.parse_int(literal)
    try:
        return int(literal)
    except ValueError as e:
        # Integer string conversion length limit
        raise UnexpectedTokenError(cursor.text, cursor.pos) from e


def decode_number(
    cursor: Cursor, config: ParseConfig = _DEFAULT_CONFIG
) -> tuple[JsonValueOrTransformed, Cursor]:
    """
    Decodes a numeric literal starting at ``cursor``.

    Literals without fraction or exponent become ``int``, the rest ``float``.
    """
    with ProfileContext("decode_number") as profile:
        text = cursor.text
        pos = cursor.pos
        if text[pos : pos + 1] == "-":
            pos += 1

        if text[pos : pos + 1] == "0":
            pos += 1
            if text[pos : pos + 1] in _DIGITS:
                raise UnexpectedTokenError(text, pos)
        else:
            pos = _scan_digits(text, pos)

        is_integer = True
        if text[pos : pos + 1] == ".":
            pos = _scan_digits(text, pos + 1)
            is_integer = False

        if text[pos : pos + 1] in ("e", "E"):
            pos += 1
            if text[pos : pos + 1] in ("+", "-"):
                pos += 1
            pos = _scan_digits(text, pos)
            is_integer = False

        value = _convert_number(
            text[cursor.pos : pos], is_integer, config, cursor
        )
        profile.chars = pos - cursor.pos
        return value, cursor.advance_to(pos)


def _decode_literal(
    cursor: Cursor, _config: ParseConfig
) -> tuple[bool | None, Cursor]:
    """Decodes ``true``, ``false`` or ``null``, matching the keyword exactly."""
    keyword, value = _LITERALS[cursor.peek()]
    if not cursor.startswith(keyword):
        raise UnexpectedTokenError(cursor.text, cursor.pos)
    return value, cursor.advance(len(keyword))


def decode_value(
    cursor: Cursor, config: ParseConfig = _DEFAULT_CONFIG
) -> tuple[JsonValueOrTransformed, Cursor]:
    """Decodes whichever value the next significant character announces."""
    with ProfileContext("decode_value") as profile:
        start = cursor.pos
        cursor = skip_whitespace(cursor)
        opener = cursor.peek()
        value: JsonValueOrTransformed
        # Containers recurse directly, two frames per nesting level
        if opener == "[":
            value, cursor = decode_array(cursor.advance(), config)
        elif opener == "{":
            value, cursor = decode_object(cursor.advance(), config)
        else:
            decoder = _SCALAR_DECODERS.get(opener)
            if decoder is None:
                raise _unexpected(cursor)
            value, cursor = decoder(cursor, config)
        profile.chars = cursor.pos - start
        return value, cursor


def decode_array(
    cursor: Cursor, config: ParseConfig = _DEFAULT_CONFIG
) -> tuple[list[JsonValueOrTransformed], Cursor]:
    """
    Decodes array elements; ``cursor`` sits just after the opening bracket.

    Elements are separated by commas and the array ends at ``]``. A comma
    directly before ``]`` fails when the next element is expected.
    """
    with ProfileContext("decode_array") as profile:
        start = cursor.pos
        cursor = skip_whitespace(cursor)
        if cursor.peek() == "]":
            profile.chars = cursor.pos + 1 - start
            return [], cursor.advance()

        values: list[JsonValueOrTransformed] = []
        while True:
            value, cursor = decode_value(cursor, config)
            values.append(value)

            cursor = skip_whitespace(cursor)
            delimiter = cursor.peek()
            if delimiter == ",":
                cursor = cursor.advance()
            elif delimiter == "]":
                profile.chars = cursor.pos + 1 - start
                return values, cursor.advance()
            else:
                raise _unexpected(cursor)


def _apply_object_hooks(
    pairs: list[tuple[str, JsonValueOrTransformed]], config: ParseConfig
) -> JsonValueOrTransformed:
    """Applies object hooks to decoded pairs."""
    if config.object_pairs_hook:
        return config.object_pairs_hook(pairs)
    # Later duplicates overwrite earlier values, first key position is kept
    obj = dict(pairs)
    if config.object_hook:
        return config.object_hook(obj)
    return obj


def decode_object(
    cursor: Cursor, config: ParseConfig = _DEFAULT_CONFIG
) -> tuple[JsonValueOrTransformed, Cursor]:
    """
    Decodes object members; ``cursor`` sits just after the opening brace.

    Each member is a string key, a colon and a value. Members are separated
    by commas and the object ends at ``}``.
    """
    with ProfileContext("decode_object") as profile:
        start = cursor.pos
        cursor = skip_whitespace(cursor)
        if cursor.peek() == "}":
            profile.chars = cursor.pos + 1 - start
            return _apply_object_hooks([], config), cursor.advance()

        pairs: list[tuple[str, JsonValueOrTransformed]] = []
        while True:
            key, cursor = decode_string(cursor, config)
            cursor = _expect(skip_whitespace(cursor), ":")
            value, cursor = decode_value(cursor, config)
            pairs.append((key, value))

            cursor = skip_whitespace(cursor)
            delimiter = cursor.peek()
            if delimiter == ",":
                cursor = skip_whitespace(cursor.advance())
            elif delimiter == "}":
                profile.chars = cursor.pos + 1 - start
                return _apply_object_hooks(pairs, config), cursor.advance()
            else:
                raise _unexpected(cursor)


_ValueDecoder = Callable[
    [Cursor, ParseConfig], tuple[JsonValueOrTransformed, Cursor]
]

_SCALAR_DECODERS: Final[dict[str, _ValueDecoder]] = {
    '"': decode_string,
    "-": decode_number,
    **dict.fromkeys("0123456789", decode_number),
    "t": _decode_literal,
    "f": _decode_literal,
    "n": _decode_literal,
}


def accept_root(
    text: str, config: ParseConfig = _DEFAULT_CONFIG
) -> JsonValueOrTransformed:
    """
    Decodes a complete document rooted at an object, an array or a string.

    Numbers and literals are only accepted at the root with
    ``allow_scalar_root``. Surrounding whitespace is allowed, anything else
    after the root value is rejected. Nesting too deep for the interpreter
    stack is reported as an unexpected token at the root value.
    """
    with ProfileContext("accept_root", len(text)):
        if text == "[]":
            return []
        if text == "{}":
            return _apply_object_hooks([], config)

        root = skip_whitespace(Cursor(text))
        opener = root.peek()
        try:
            if opener == "{":
                value, cursor = decode_object(root.advance(), config)
            elif opener == "[":
                value, cursor = decode_array(root.advance(), config)
            elif opener == '"':
                value, cursor = decode_string(root, config)
            elif config.allow_scalar_root:
                value, cursor = decode_value(root, config)
            else:
                raise _unexpected(root)
        except RecursionError as e:
            raise UnexpectedTokenError(text, root.pos) from e

        cursor = skip_whitespace(cursor)
        if not cursor.at_end:
            raise UnexpectedTokenError(cursor.text, cursor.pos)
        return value


def _decode_utf8(data: bytes | bytearray) -> str:
    """Decodes UTF-8 input, reporting invalid bytes as an unexpected token."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        doc = data.decode("utf-8", "replace")
        error = UnexpectedTokenError(doc, len(data[: e.start].decode("utf-8")))
        error.byte_pos = e.start
        raise error from e


def decode(s: str | bytes | bytearray, **kwargs: Any) -> JsonValueOrTransformed:
    """
    Decodes a JSON document into Python objects.

    Accepts ``str`` or UTF-8 ``bytes``/``bytearray``; keyword arguments build
    a ``ParseConfig``. Raises ``UnexpectedTokenError`` or
    ``UnexpectedEndOfBufferError`` on the first violation found.
    """
    if not isinstance(s, str | bytes | bytearray):
        raise TypeError(
            "the JSON object must be str, bytes or bytearray, "
            f"not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    is_binary = not isinstance(s, str)
    try:
        text = _decode_utf8(s) if is_binary else s  # type: ignore[arg-type]
        return accept_root(text, config)
    except JSONDecodeError as e:
        if is_binary and e.byte_pos is None:
            e.byte_pos = len(e.doc[: e.pos].encode("utf-8"))
        logger.debug("rejected JSON document: %s", e)
        raise


__all__ = [
    "PROFILE_HOT_PATHS",
    "Cursor",
    "HotPathStats",
    "JSONDecodeError",
    "JsonValue",
    "ParseConfig",
    "UnexpectedEndOfBufferError",
    "UnexpectedTokenError",
    "accept_root",
    "clear_hot_path_stats",
    "decode",
    "decode_array",
    "decode_number",
    "decode_object",
    "decode_string",
    "decode_value",
    "get_hot_path_stats",
    "log_hot_path_stats",
    "skip_whitespace",
]
