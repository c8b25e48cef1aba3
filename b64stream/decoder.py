# Licensed under the GPLv3 - see LICENSE
"""Incremental base64 decoding.

Input may arrive in arbitrarily small pieces, which can split a group of
four base64 characters anywhere.  A `~b64stream.decoder.DecoderState`
carries the progress within the current group from one call of
`~b64stream.decoder.decode` to the next, so that decoding a sequence of
chunks gives exactly the same bytes as decoding their concatenation.

Characters outside the base64 alphabet (including padding, white space
and line breaks) are skipped.  As soon as the output buffer is full,
decoding stops; ``state.consumed`` tells how much of the input was used,
so the remainder can be passed in again once more room is available.

Examples
--------
>>> from b64stream import DecoderState, decode
>>> state = DecoderState()
>>> out = bytearray(3)
>>> decode(state, b'TW', out)
1
>>> decode(state, b'Fu', memoryview(out)[1:])
2
>>> bytes(out)
b'Man'
"""
from enum import IntEnum

from .symbol import as_byte_array, decode_symbols


__all__ = ['Phase', 'DecoderState', 'decode', 'decode_partial',
           'max_decoded_size']


class Phase(IntEnum):
    """Position within the current group of four symbols."""
    AWAITING_FIRST = 0
    AWAITING_SECOND = 1
    AWAITING_THIRD = 2
    AWAITING_FOURTH = 3


class DecoderState:
    """Progress of a base64 decoding session.

    A new instance starts at the beginning of a group.  Pass the same
    instance to every `~b64stream.decoder.decode` call of a session; use
    `reset` (or a new instance) to start another session.

    Attributes
    ----------
    phase : `~b64stream.decoder.Phase`
        Which symbol of a group is expected next.
    pending_byte : int
        High bits of the output byte still being assembled.  Only the
        top 6, 4 or 2 bits are meaningful, for phases ``AWAITING_SECOND``,
        ``AWAITING_THIRD`` and ``AWAITING_FOURTH``, respectively.
    consumed : int
        Number of input bytes used by the last decode call.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        """Re-initialise, ready for a new decoding session."""
        self.phase = Phase.AWAITING_FIRST
        self.pending_byte = 0
        self.consumed = 0

    @property
    def in_group(self):
        """Whether part of a group has been decoded."""
        return self.phase != Phase.AWAITING_FIRST

    @property
    def dangling(self):
        """Whether stopping now would lose information.

        This is the case if only a single symbol of a group has been seen
        (its six bits cannot form a byte), or if the bits kept for the
        next byte are not all zero.  Properly padded input never leaves
        dangling bits.
        """
        return (self.phase == Phase.AWAITING_SECOND
                or (self.in_group and self.pending_byte != 0))

    def copy(self):
        new = self.__class__()
        new.phase = self.phase
        new.pending_byte = self.pending_byte
        new.consumed = self.consumed
        return new

    def __eq__(self, other):
        if not isinstance(other, DecoderState):
            return NotImplemented
        if not self.in_group:
            # pending_byte is meaningless outside a group.
            return not other.in_group
        return (self.phase == other.phase
                and self.pending_byte == other.pending_byte)

    def __repr__(self):
        return ("{0}(phase={1}, pending_byte=0x{2:02x})"
                .format(self.__class__.__name__, self.phase.name,
                        self.pending_byte))


def _as_output_view(output):
    view = memoryview(output)
    if view.readonly:
        raise TypeError('output buffer must be writable.')
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')
    return view


def max_decoded_size(nbytes):
    """Output room that ensures a call uses all of ``nbytes`` of input.

    Four characters give at most three bytes, and a group left partially
    decoded by a previous call can complete one more.  One extra byte
    ensures the output is never full while input remains.
    """
    return nbytes * 3 // 4 + 2


def decode_partial(state, data, output):
    """Decode as much of a chunk of base64 text as fits in the output.

    Parameters
    ----------
    state : `~b64stream.decoder.DecoderState`
        Progress so far; updated in-place.
    data : bytes-like or `~numpy.ndarray`
        Next chunk of base64 text.  Strings are not accepted, since
        ``consumed`` counts bytes, not characters.
    output : writable buffer
        Where decoded bytes are stored, starting at its first byte.

    Returns
    -------
    written : int
        Number of bytes stored in ``output``.
    consumed : int
        Number of bytes of ``data`` that were used.  This is less than
        ``len(data)`` only if ``output`` ran out of room; in that case,
        ``data[consumed:]`` should be passed in on the next call.
    """
    if isinstance(data, str):
        raise TypeError('base64 text should be bytes-like, not str; '
                        'encode it first.')
    codes = as_byte_array(data)
    out = _as_output_view(output)
    capacity = len(out)
    phase = state.phase
    pending = state.pending_byte
    written = 0
    consumed = 0
    while consumed < len(codes) and written < capacity:
        # Enough characters to fill the remaining room if all are valid.
        end = consumed + 4 * (capacity - written + 1)
        for value in decode_symbols(codes[consumed:end]).tolist():
            if written == capacity:
                break

            if value < 0:
                # Not part of the alphabet: skip.
                consumed += 1
                continue

            if phase == Phase.AWAITING_FIRST:
                pending = value << 2
                phase = Phase.AWAITING_SECOND
            else:
                if phase == Phase.AWAITING_SECOND:
                    out[written] = pending | (value >> 4)
                    pending = (value & 0x0f) << 4
                    phase = Phase.AWAITING_THIRD
                elif phase == Phase.AWAITING_THIRD:
                    out[written] = pending | (value >> 2)
                    pending = (value & 0x03) << 6
                    phase = Phase.AWAITING_FOURTH
                else:
                    out[written] = pending | value
                    pending = 0
                    phase = Phase.AWAITING_FIRST
                written += 1

            consumed += 1

    state.phase = phase
    state.pending_byte = pending
    state.consumed = consumed
    return written, consumed


def decode(state, data, output):
    """Decode a chunk of base64 text, continuing from a previous state.

    Invalid characters are skipped, and a group of four symbols may be
    split over any number of calls.  See
    `~b64stream.decoder.decode_partial` for a description of the
    parameters.  The number of input bytes used is stored in
    ``state.consumed``.

    Returns
    -------
    written : int
        Number of bytes stored in ``output``.
    """
    return decode_partial(state, data, output)[0]
