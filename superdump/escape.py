"""
Escaping of raw column values for single-quoted MySQL string literals.
"""

import re

ESCAPE_SEQUENCES: dict[bytes, bytes] = {
    b"\x00": b"\\0",
    b"\n": b"\\n",
    b"\r": b"\\r",
    b"\\": b"\\\\",
    b"'": b"\\'",
    b'"': b'\\"',
    b"\x1a": b"\\Z",
}

_SPECIAL_BYTES = re.compile(rb"[\x00\n\r\\'\"\x1a]")


def escape(data: bytes) -> bytes:
    """Escape ``data`` so it can be embedded between single quotes.

    The input is scanned once from left to right; bytes that are not special
    are copied unchanged, so arbitrary binary (non UTF-8) content survives.
    """
    return _SPECIAL_BYTES.sub(lambda match: ESCAPE_SEQUENCES[match.group()], data)
