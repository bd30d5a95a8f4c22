"""Utility functions for C code generation."""

_SIMPLE_ESCAPES = {
    '\\': '\\\\',
    '\n': '\\n',
    '\t': '\\t',
    '\r': '\\r',
}


def escape_byte(b: int, quote: str) -> str:
    """Escape one byte for a C literal delimited by quote."""
    c = chr(b)
    if c == quote:
        return '\\' + c
    if c in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[c]
    if 0x20 <= b < 0x7f:
        return c
    # Always three digits so a following digit is not absorbed
    return f'\\{b:03o}'


def c_string_literal(s: str, encoding: str = 'utf-8') -> str:
    return '"' + ''.join(escape_byte(b, '"') for b in s.encode(encoding)) + '"'


def c_char_literal(key: str) -> str:
    """Character literal for a single-byte trie key (see trie.trie_key)."""
    b = ord(key)
    assert b <= 0xff, f"trie key {key!r} is not a byte"
    if b == 0:
        return "'\\0'"
    return "'" + escape_byte(b, "'") + "'"
