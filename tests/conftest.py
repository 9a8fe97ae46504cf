"""
Shared pytest fixtures for audio-defects tests.

WAV fixtures are synthesised in memory so every chunk, size field and
sample can be controlled exactly.
"""

import io
import struct

import pytest

from audio_defects.models.audio_format import AudioFormat
from audio_defects.models.detection_config import DetectionConfig


def pack_samples(samples, bits_per_sample=16):
    """
    Packs integer samples little-endian at the given bit depth.

    8-bit samples are written as raw byte values (0-255); 16 and 24-bit
    samples as signed integers.
    """
    if bits_per_sample == 8:
        return bytes(samples)
    if bits_per_sample == 16:
        return struct.pack(f'<{len(samples)}h', *samples)
    if bits_per_sample == 24:
        return b''.join(int(s).to_bytes(3, 'little', signed=True) for s in samples)
    raise ValueError(f'Unsupported bit depth {bits_per_sample}')


def fmt_chunk(
    channels=1,
    sample_rate=48000,
    bits_per_sample=16,
    format_code=1,
    extension=b''
):
    block_align = channels * bits_per_sample // 8
    body = struct.pack(
        '<HHIIHH',
        format_code,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bits_per_sample
    ) + extension
    return b'fmt ' + struct.pack('<I', len(body)) + body


def chunk(tag, body):
    return tag + struct.pack('<I', len(body)) + body


def build_wav(
    samples=(),
    channels=1,
    sample_rate=48000,
    bits_per_sample=16,
    format_code=1,
    fmt_extension=b'',
    before_fmt=(),
    before_data=(),
    declared_payload=None,
    payload=None
):
    """
    Builds a complete WAV file as bytes.

    Args:
        samples: Interleaved integer samples
        before_fmt / before_data: Extra raw chunks inserted at those places
        declared_payload: Override for the 'data' size field
        payload: Raw payload bytes (overrides samples)
    """
    if payload is None:
        payload = pack_samples(list(samples), bits_per_sample)
    if declared_payload is None:
        declared_payload = len(payload)

    body = b'WAVE'
    body += b''.join(before_fmt)
    body += fmt_chunk(channels, sample_rate, bits_per_sample, format_code, fmt_extension)
    body += b''.join(before_data)
    body += b'data' + struct.pack('<I', declared_payload) + payload

    return b'RIFF' + struct.pack('<I', len(body)) + body


@pytest.fixture
def make_wav():
    """Fixture providing the WAV byte builder."""
    return build_wav


@pytest.fixture
def make_stream():
    """Fixture providing a builder returning an in-memory binary stream."""
    def _make_stream(**kwargs):
        return io.BytesIO(build_wav(**kwargs))
    return _make_stream


@pytest.fixture
def make_chunk():
    """Fixture providing a raw RIFF chunk builder."""
    return chunk


@pytest.fixture
def pack():
    """Fixture providing the sample packer."""
    return pack_samples


@pytest.fixture
def mono_16bit_format():
    """Fixture providing a mono 16-bit 48 kHz format with a 1000-frame payload."""
    return AudioFormat(channels=1, sample_rate=48000, bytes_per_sample=2, payload_length=2000)


@pytest.fixture
def no_debounce_config():
    """Fixture providing thresholds with the debounce window disabled."""
    return DetectionConfig(
        silence_threshold_samples=10,
        hold_threshold_samples=5,
        no_warning_duration_s=0.0,
        hold_level_threshold_dbfs=-50.0
    )
