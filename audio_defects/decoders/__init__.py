"""
PCM sample decoders.
"""

from audio_defects.decoders.sample_decoder import SampleStream, decode_block, decode_sample

__all__ = ['SampleStream', 'decode_block', 'decode_sample']
