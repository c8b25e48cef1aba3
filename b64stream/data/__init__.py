# Licensed under the GPLv3 - see LICENSE
"""Sample files with base64 encoded data."""

# Use private names to avoid inclusion in the sphinx documentation.
from os import path as _path


def _full_path(name, dirname=_path.dirname(_path.abspath(__file__))):
    return _path.join(dirname, name)


SAMPLE_B64 = _full_path('sample.b64')
"""Base64 sample, wrapped at 76 characters per line.  332 decoded bytes.

The decoded data consist of all byte values 0 to 255 in order, followed by
the 76 byte line "Man is distinguished, not only by his reason, but by this
singular passion.\\n".  Created using the coreutils ``base64`` program, so
the text ends with one padding character.
"""
