"""Unit tests for PCM sample decoding and SampleStream."""

import io

import numpy as np
import pytest

from audio_defects.decoders.sample_decoder import SampleStream, decode_block, decode_sample
from audio_defects.exceptions import UnexpectedEndError
from audio_defects.models.audio_format import AudioFormat
from audio_defects.readers.byte_reader import ByteReader


class TestDecodeSample:
    """Test suite for decode_sample and decode_block."""

    @pytest.mark.parametrize('value', [0, 1, -1, 12345, -12345, 32767, -32768])
    def test_16bit_sample_lands_in_top_bytes(self, pack, value):
        """Test that a 16-bit sample is shifted into the high 16 bits."""
        decoded = decode_sample(pack([value], 16), 2)

        assert decoded == value * 65536
        assert decoded >> 16 == value
        assert decoded & 0xFFFF == 0

    @pytest.mark.parametrize('value', [0, 0x123456, -1, 8388607, -8388608])
    def test_24bit_sample_lands_in_top_bytes(self, pack, value):
        """Test that a 24-bit sample is shifted into the high 24 bits."""
        decoded = decode_sample(pack([value], 24), 3)

        assert decoded == value * 256

    def test_8bit_sample_is_not_recentered(self):
        """Test that 8-bit bytes become the top byte unchanged."""
        assert decode_sample(b'\x00', 1) == 0
        assert decode_sample(b'\x7f', 1) == 0x7F000000
        assert decode_sample(b'\x80', 1) == -(2 ** 31)
        assert decode_sample(b'\xff', 1) == -0x01000000

    def test_16bit_full_scale(self):
        """Test the positive and negative 16-bit extremes."""
        assert decode_sample(b'\xff\x7f', 2) == 0x7FFF0000
        assert decode_sample(b'\x00\x80', 2) == -(2 ** 31)

    def test_extra_bytes_are_ignored(self):
        """Test that only the first sample's bytes are decoded."""
        assert decode_sample(b'\x01\x00\xff\xff', 2) == 0x00010000

    def test_truncated_sample_raises(self):
        """Test that fewer bytes than one sample raise UnexpectedEndError."""
        with pytest.raises(UnexpectedEndError) as exc_info:
            decode_sample(b'\x01\x02', 3)

        assert exc_info.value.expected == 3
        assert exc_info.value.received == 2

    def test_decode_block(self, pack):
        """Test decoding several samples at once."""
        decoded = decode_block(pack([1, -2, 3], 24), 3)

        assert decoded.dtype == np.int32
        assert decoded.tolist() == [256, -512, 768]

    def test_decode_block_ignores_partial_sample(self):
        """Test that trailing bytes that do not form a sample are dropped."""
        assert decode_block(b'\x01\x02\x03', 2).tolist() == [0x02010000]

    def test_decode_block_empty(self):
        """Test decoding an empty buffer."""
        assert len(decode_block(b'', 2)) == 0

    def test_decode_block_invalid_width(self):
        """Test that unsupported sample widths raise ValueError."""
        with pytest.raises(ValueError, match='bytes_per_sample'):
            decode_block(b'\x00\x00\x00\x00', 4)


class TestSampleStream:
    """Test suite for SampleStream."""

    def _stream(self, data, channels=1, bytes_per_sample=2, payload_length=None, **kwargs):
        audio_format = AudioFormat(
            channels=channels,
            sample_rate=48000,
            bytes_per_sample=bytes_per_sample,
            payload_length=len(data) if payload_length is None else payload_length
        )
        return SampleStream(audio_format, ByteReader(io.BytesIO(data)), **kwargs)

    def test_yields_interleaved_samples(self, pack):
        """Test that samples come out in frame-interleaved order."""
        stream = self._stream(pack([1, 2, 3, 4, 5, 6], 16), channels=2)

        assert list(stream) == [v << 16 for v in [1, 2, 3, 4, 5, 6]]
        assert stream.samples_read == 6
        assert stream.total_frames == 3

    def test_small_blocks(self, pack):
        """Test that block boundaries do not affect the sequence."""
        values = list(range(-50, 50))
        stream = self._stream(pack(values, 24), channels=2, bytes_per_sample=3, block_frames=3)

        assert list(stream) == [v << 8 for v in values]

    def test_partial_trailing_frame_is_not_read(self, pack):
        """Test that bytes after the last whole frame are left unread."""
        data = pack([1, 2, 3], 16)
        reader = ByteReader(io.BytesIO(data))
        audio_format = AudioFormat(channels=2, sample_rate=48000, bytes_per_sample=2, payload_length=6)

        samples = list(SampleStream(audio_format, reader))

        assert samples == [1 << 16, 2 << 16]
        assert reader.position == 4

    def test_stops_at_declared_payload(self, pack):
        """Test that bytes after the payload (trailing chunks) are not decoded."""
        data = pack([7, 8], 16) + b'LIST\x04\x00\x00\x00abcd'

        assert list(self._stream(data, payload_length=4)) == [7 << 16, 8 << 16]

    def test_empty_payload(self):
        """Test that an empty payload yields nothing."""
        assert list(self._stream(b'')) == []

    def test_truncated_payload(self, pack):
        """Test that arrived samples are yielded before UnexpectedEndError."""
        stream = self._stream(pack([1, 2, 3], 16), payload_length=20)
        received = []

        with pytest.raises(UnexpectedEndError) as exc_info:
            for value in stream:
                received.append(value)

        assert received == [1 << 16, 2 << 16, 3 << 16]
        assert exc_info.value.expected == 20
        assert exc_info.value.received == 6

    def test_single_pass(self, pack):
        """Test that a stream cannot be iterated twice."""
        stream = self._stream(pack([1], 16))
        list(stream)

        with pytest.raises(RuntimeError):
            iter(stream)

    def test_invalid_block_size(self):
        """Test that a non-positive block size is rejected."""
        with pytest.raises(ValueError):
            self._stream(b'', block_frames=0)
