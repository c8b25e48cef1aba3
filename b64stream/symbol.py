# Licensed under the GPLv3 - see LICENSE
"""Classification of single base64 characters.

The standard base64 alphabet runs from ``+`` (code 43) to ``z`` (code 122).
Characters are looked up in a dense table indexed by ``code - 43``; any
character outside that span, or inside it but not part of the alphabet,
is invalid.  Padding (``=``) gets its own marker, but the decoder treats
it like any other invalid character, i.e., it is skipped.
"""
from operator import index

import numpy as np


__all__ = ['ALPHABET', 'INVALID', 'PADDING', 'DECODING_TABLE',
           'decode_symbol', 'decode_symbols']


ALPHABET = (b'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
            b'abcdefghijklmnopqrstuvwxyz'
            b'0123456789+/')
"""The 64 base64 characters, in the order of the values they encode."""

INVALID = -1
"""Marker for a character that is not part of the alphabet."""
PADDING = -2
"""Marker for the padding character ``=``."""

_OFFSET = ord('+')


def _make_table():
    codes = np.frombuffer(ALPHABET, dtype='u1').astype(int) - _OFFSET
    table = np.full(codes.max() + 1, INVALID, dtype='i1')
    table[codes] = np.arange(len(ALPHABET))
    table[ord('=') - _OFFSET] = PADDING
    table.flags.writeable = False
    return table


DECODING_TABLE = _make_table()
"""Symbol values for the characters ``+`` to ``z``, indexed by ``code - 43``.

Read-only, so it can be shared freely between decoders.
"""

# Same classification for every possible byte, for vectorised lookups.
_BYTE_TABLE = np.full(256, INVALID, dtype='i1')
_BYTE_TABLE[_OFFSET:_OFFSET + len(DECODING_TABLE)] = DECODING_TABLE
_BYTE_TABLE.flags.writeable = False


def decode_symbol(c):
    """Decode a single base64 character.

    Parameters
    ----------
    c : int, bytes, or str
        Character code, or a single character.

    Returns
    -------
    value : int
        The 6-bit value (0 to 63) encoded by the character, or
        `~b64stream.symbol.INVALID` or `~b64stream.symbol.PADDING`
        for characters outside the alphabet.  Never raises for
        unknown characters.

    Examples
    --------
    >>> from b64stream import decode_symbol
    >>> decode_symbol('T'), decode_symbol(b'/'), decode_symbol(ord('!'))
    (19, 63, -1)
    """
    try:
        code = index(c)
    except TypeError:
        # Single character given as bytes or str (ord raises for others).
        code = ord(c)

    code -= _OFFSET
    if code < 0 or code >= len(DECODING_TABLE):
        return INVALID

    return int(DECODING_TABLE[code])


def decode_symbols(data):
    """Decode all characters in a chunk of base64 text at once.

    Parameters
    ----------
    data : bytes-like, `~numpy.ndarray`, or str
        Characters to classify.  Arrays are interpreted as raw bytes;
        strings are encoded as UTF-8 (non-ASCII bytes are all invalid).

    Returns
    -------
    values : `~numpy.ndarray` of int8
        Value for each input byte, as would be given by
        `~b64stream.symbol.decode_symbol`.
    """
    return _BYTE_TABLE[as_byte_array(data)]


def as_byte_array(data):
    """View input data as a flat array of unsigned bytes."""
    if isinstance(data, str):
        data = data.encode('utf-8')
    if isinstance(data, np.ndarray):
        return np.ascontiguousarray(data).reshape(-1).view('u1')

    return np.frombuffer(data, dtype='u1')
