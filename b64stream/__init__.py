# Licensed under the GPLv3 - see LICENSE
"""Streaming base64 decoding.

Decodes base64 text that arrives in arbitrary pieces, skipping anything
that is not part of the alphabet, and never writing more than the output
buffer can hold.
"""
from .symbol import (ALPHABET, INVALID, PADDING, DECODING_TABLE,  # noqa
                     decode_symbol, decode_symbols)
from .decoder import (Phase, DecoderState, decode, decode_partial,  # noqa
                      max_decoded_size)
from .core import PartialGroupWarning, decode_all, Base64Decoder  # noqa
from .streamfile import Base64StreamReader, open  # noqa

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version(__name__)
except PackageNotFoundError:  # Can happen in source checkout.
    __version__ = ''

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_numpy_version__ = '1.24'
__minimum_astropy_version__ = '5.1'
