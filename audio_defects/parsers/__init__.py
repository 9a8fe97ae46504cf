"""
Container parsers.
"""

from audio_defects.parsers.header_parser import WavHeaderParser, parse_header

__all__ = ['WavHeaderParser', 'parse_header']
