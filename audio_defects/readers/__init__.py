"""
Byte source readers.
"""

from audio_defects.readers.byte_reader import ByteReader

__all__ = ['ByteReader']
