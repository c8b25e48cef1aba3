# Licensed under the GPLv3 - see LICENSE
import io
import base64
import warnings

import pytest
import numpy as np

from .. import core
from ..core import PartialGroupWarning, decode_all, Base64Decoder
from ..data import SAMPLE_B64


class TestDecodeAll:
    @pytest.mark.parametrize(('data', 'expected'), [
        (b'TWFu', b'Man'),
        (b'TWE=', b'Ma'),
        (b'TQ==', b'M'),
        (b'TWFuIGlz', b'Man is'),
        (b'TW Fu\r\n', b'Man'),
        ('TWFu', b'Man'),
        (bytearray(b'TWFu'), b'Man'),
        (np.frombuffer(b'TWFu', dtype='u1'), b'Man')])
    def test_decode(self, data, expected):
        result = decode_all(data)
        assert isinstance(result, bytes)
        assert result == expected

    @pytest.mark.parametrize('data', [b'', b'!!!!', b'====', b'T', b'T==='])
    def test_no_result(self, data):
        assert decode_all(data) is None

    def test_sample(self):
        with open(SAMPLE_B64, 'rb') as fh:
            data = fh.read()
        result = decode_all(data)
        assert result == base64.b64decode(data)
        assert result[:256] == bytes(range(256))
        assert result[256:].startswith(b'Man is distinguished')

    def test_allocation_failure(self, monkeypatch):
        def no_memory(size):
            raise MemoryError

        monkeypatch.setattr(core, 'bytearray', no_memory, raising=False)
        with pytest.warns(UserWarning, match='could not allocate'):
            assert decode_all(b'TWFu') is None


class Collector:
    def __init__(self):
        self.written = []
        self.finalized = False
        self.closed = False

    def write(self, data):
        self.written.append(data)
        return len(data)

    def finalize(self):
        self.finalized = True

    def close(self):
        self.closed = True


class TestBase64Decoder:
    def test_write(self):
        collector = Collector()
        decoder = Base64Decoder(collector)
        assert decoder.write(b'TW') == 2
        assert decoder.write(b'Fu') == 2
        assert decoder.write('IGlz') == 4
        assert b''.join(collector.written) == b'Man is'

    def test_write_string_returns_characters(self):
        collector = Collector()
        decoder = Base64Decoder(collector)
        # Five characters, but six bytes once encoded as UTF-8.
        assert decoder.write('\u00e9TWFu') == 5
        assert b''.join(collector.written) == b'Man'

    def test_nothing_written_for_empty_result(self):
        collector = Collector()
        decoder = Base64Decoder(collector)
        decoder.write(b'T')
        decoder.write(b'  ==')
        assert collector.written == []

    def test_sample_single_characters(self):
        with open(SAMPLE_B64, 'rb') as fh:
            data = fh.read()
        fw = io.BytesIO()
        decoder = Base64Decoder(fw)
        for i in range(len(data)):
            decoder.write(data[i:i+1])
        assert fw.getvalue() == base64.b64decode(data)

    def test_finalize(self):
        collector = Collector()
        decoder = Base64Decoder(collector)
        decoder.write(b'TWE=')
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            decoder.finalize()
        assert collector.finalized
        assert not decoder.state.in_group

    def test_finalize_dangling(self):
        collector = Collector()
        decoder = Base64Decoder(collector)
        decoder.write(b'TWFuT')
        with pytest.warns(PartialGroupWarning, match='partial group'):
            decoder.finalize()
        assert not decoder.state.in_group
        # New session starts afresh.
        decoder.write(b'TWFu')
        assert b''.join(collector.written) == b'ManMan'

    def test_close_and_context(self):
        collector = Collector()
        with Base64Decoder(collector) as decoder:
            decoder.write(b'TWFu')
        assert collector.closed
        # Underlying objects without finalize are fine.
        decoder = Base64Decoder(io.BytesIO())
        decoder.finalize()
        decoder.close()

    def test_repr(self):
        decoder = Base64Decoder(None)
        assert repr(decoder) == 'Base64Decoder(underlying=None)'


def test_version():
    from importlib.metadata import version, PackageNotFoundError
    from .. import __version__
    try:
        expected = version('b64stream')
    except PackageNotFoundError:
        expected = ''
    assert __version__ == expected
