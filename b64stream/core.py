# Licensed under the GPLv3 - see LICENSE
"""One-shot and push-style base64 decoding."""
import warnings

from .decoder import DecoderState, decode, max_decoded_size


__all__ = ['PartialGroupWarning', 'decode_all', 'Base64Decoder']


class PartialGroupWarning(UserWarning):
    """Decoding ended with bits that could not be turned into a byte."""
    pass


def decode_all(data):
    """Decode a complete piece of base64 text.

    Invalid characters, including padding, are skipped.

    Parameters
    ----------
    data : bytes-like, `~numpy.ndarray`, or str
        The base64 text.

    Returns
    -------
    decoded : bytes or None
        The decoded bytes, or `None` if nothing could be decoded (or if
        no memory could be allocated for the result).

    Examples
    --------
    >>> from b64stream import decode_all
    >>> decode_all(b'TWE=')
    b'Ma'
    >>> decode_all('!!!!') is None
    True
    """
    if isinstance(data, str):
        data = data.encode('utf-8')
    nbytes = memoryview(data).nbytes
    try:
        # Every decoded byte needs at least one input byte.
        scratch = bytearray(nbytes)
    except MemoryError:
        warnings.warn("could not allocate {0} bytes for decoding."
                      .format(nbytes))
        return None

    written = decode(DecoderState(), data, scratch)
    if written == 0:
        return None

    return bytes(scratch[:written])


class Base64Decoder:
    """Decode base64 text written in pieces, passing on the result.

    Parameters
    ----------
    underlying : object
        Receives decoded bytes through its ``write`` method.  If it has
        ``finalize`` or ``close`` methods, these are called by the
        corresponding methods of the decoder.

    Examples
    --------
    >>> import io
    >>> from b64stream import Base64Decoder
    >>> fw = io.BytesIO()
    >>> decoder = Base64Decoder(fw)
    >>> for chunk in (b'TW', b'Fu IG', b'lz'):
    ...     _ = decoder.write(chunk)
    >>> fw.getvalue()
    b'Man is'
    """
    def __init__(self, underlying):
        self.underlying = underlying
        self.state = DecoderState()

    def write(self, data):
        """Decode a chunk and write the result to the underlying object.

        Returns the length of the chunk, since all of it is always used.
        """
        length = len(data)
        if isinstance(data, str):
            data = data.encode('utf-8')
        buffer = bytearray(max_decoded_size(memoryview(data).nbytes))
        written = decode(self.state, data, buffer)
        if written > 0:
            self.underlying.write(bytes(buffer[:written]))

        return length

    def finalize(self):
        """End the decoding session.

        Warns if bits that could not form a full byte are left over,
        and starts a fresh session.
        """
        if self.state.dangling:
            warnings.warn("finalizing with partial group remaining; {0} "
                          "will not be decoded.".format(self.state),
                          PartialGroupWarning)
        self.state.reset()

        if hasattr(self.underlying, 'finalize'):
            self.underlying.finalize()

    def close(self):
        if hasattr(self.underlying, 'close'):
            self.underlying.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return "{0}(underlying={1!r})".format(self.__class__.__name__,
                                              self.underlying)
