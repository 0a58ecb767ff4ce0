"""
Attribute extractors for the braw2ilpd tool.

Re-exports the variant decoder and the immersive attribute extractor.
"""

from .variant import decode_variant, unavailable_value, format_hex_preview
from .immersive import extract_immersive_attributes

__all__ = [
    # Variant decoding
    'decode_variant',
    'unavailable_value',
    'format_hex_preview',

    # Attribute extraction
    'extract_immersive_attributes',
]
