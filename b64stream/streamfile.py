# Licensed under the GPLv3 - see LICENSE
"""Read decoded data from files holding base64 text.

Examples
--------
>>> from b64stream import streamfile
>>> from b64stream.data import SAMPLE_B64
>>> with streamfile.open(SAMPLE_B64, 'rb') as fh:
...     first = fh.read(4)
...     fh.seek(256)
...     text = fh.read(3)
256
>>> first, text
(b'\\x00\\x01\\x02\\x03', b'Man')
"""
import io
from operator import index

from astropy.utils import lazyproperty

from .decoder import DecoderState, decode, max_decoded_size


__all__ = ['Base64StreamReader', 'open']


class Base64StreamReader:
    """File-like reader that decodes base64 text from an underlying file.

    Parameters
    ----------
    fh : filehandle
        Binary file handle holding the base64 text.  Reading starts at its
        current position.
    chunk_size : int, optional
        Number of bytes read from ``fh`` at a time.  Default: taken from
        the class attribute.
    """
    _chunk_size = 4096
    """Default number of encoded bytes to read from the file at a time."""

    def __init__(self, fh, chunk_size=None):
        if chunk_size is None:
            chunk_size = self._chunk_size
        chunk_size = index(chunk_size)
        if chunk_size <= 0:
            raise ValueError("chunk_size should be positive.")
        self.fh = fh
        self.chunk_size = chunk_size
        self.state = DecoderState()
        self.offset = 0
        self._start = fh.tell() if fh.seekable() else None
        self._buffer = bytearray()
        self._closed = False
        self._owns_fh = False

    def readable(self):
        return True

    def writable(self):
        return False

    def seekable(self):
        return self._start is not None

    @property
    def closed(self):
        return self._closed

    def tell(self):
        return self.offset

    def _decode_chunk(self):
        """Read a chunk from the file and decode it; None at end of file."""
        chunk = self.fh.read(self.chunk_size)
        if not chunk:
            return None
        decoded = bytearray(max_decoded_size(len(chunk)))
        written = decode(self.state, chunk, decoded)
        del decoded[written:]
        return decoded

    def read(self, count=-1):
        """Read and decode up to ``count`` bytes (all if negative)."""
        if self.closed:
            raise ValueError('read of closed file.')
        if count is None:
            count = -1

        while count < 0 or len(self._buffer) < count:
            decoded = self._decode_chunk()
            if decoded is None:
                break
            self._buffer += decoded

        if count < 0:
            count = len(self._buffer)
        data = bytes(self._buffer[:count])
        del self._buffer[:count]
        self.offset += len(data)
        return data

    def readinto(self, buffer):
        """Read decoded bytes into a pre-allocated, writable buffer."""
        view = memoryview(buffer).cast('B')
        data = self.read(len(view))
        view[:len(data)] = data
        return len(data)

    def _rewind(self):
        self.fh.seek(self._start)
        self.state.reset()
        self._buffer.clear()
        self.offset = 0

    def seek(self, offset, whence=0):
        """Move to a given offset in the decoded data.

        Moving backwards requires decoding again from the start.  Offsets
        beyond the end of the data are moved to the end.
        """
        if self.closed:
            raise ValueError('seek of closed file.')
        if not self.seekable():
            raise OSError('underlying file is not seekable.')

        if whence == 1:
            offset += self.offset
        elif whence == 2:
            offset += self.size
        elif whence != 0:
            raise ValueError("invalid 'whence'; should be 0, 1, or 2.")

        if offset < 0:
            raise OSError('invalid offset')

        if offset < self.offset:
            self._rewind()

        while self.offset < offset:
            if not self.read(min(offset - self.offset, 1 << 20)):
                break

        return self.offset

    @lazyproperty
    def size(self):
        """Total number of decoded bytes.

        Found by decoding the whole file once; the position is unchanged.
        """
        if not self.seekable():
            raise OSError('cannot determine size of a non-seekable file.')
        position = self.fh.tell()
        self.fh.seek(self._start)
        state = DecoderState()
        size = 0
        while True:
            chunk = self.fh.read(self.chunk_size)
            if not chunk:
                break
            size += decode(state, chunk,
                           bytearray(max_decoded_size(len(chunk))))
        self.fh.seek(position)
        return size

    def close(self):
        if self._owns_fh:
            self.fh.close()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        base_repr = ("{0}(fh={1!r}, chunk_size={2})"
                     .format(self.__class__.__name__, self.fh,
                             self.chunk_size))
        extra = "At offset: {0}; {1!r}.".format(self.tell(), self.state)
        return base_repr + "\n# " + extra


def open(name, mode='rb', **kwargs):
    """Open a file holding base64 text for reading decoded data.

    Parameters
    ----------
    name : str, `~pathlib.Path`, or filehandle
        File name, or a binary file handle already opened for reading
        (which will not be closed when the reader is closed).
    mode : str, optional
        Should be 'rb' (default); writing is not supported.
    **kwargs
        Further arguments passed on to
        `~b64stream.streamfile.Base64StreamReader`.
    """
    if not ('r' in mode and 'b' in mode):
        raise ValueError("invalid mode '{0}'; only 'rb' is supported."
                         .format(mode))

    if hasattr(name, 'read'):
        return Base64StreamReader(name, **kwargs)

    fh = io.open(name, 'rb')
    try:
        reader = Base64StreamReader(fh, **kwargs)
    except Exception:
        fh.close()
        raise
    reader._owns_fh = True
    return reader
