"""
Variant decoding for the braw2ilpd tool.

Converts one tagged value returned by the codec into an owned, normalized
attribute value with a human-readable rendering.
"""

from typing import Any, Optional

from ..config.constants import MAX_RAW_BYTES, HEX_PREVIEW_BYTES, HEX_TRUNCATION_MARKER
from ..models import (
    AttributeValue,
    ByteArrayValue,
    EmptyValue,
    ScalarValue,
    TextValue,
    UnavailableValue,
    UnknownValue,
    VariantKind,
)
from ..sdk import SafeArray, Variant, VariantType

# Scalar tag -> (kind, display label)
SCALAR_KINDS = {
    VariantType.U8: (VariantKind.U8, "U8"),
    VariantType.S16: (VariantKind.S16, "S16"),
    VariantType.U16: (VariantKind.U16, "U16"),
    VariantType.S32: (VariantKind.S32, "S32"),
    VariantType.U32: (VariantKind.U32, "U32"),
    VariantType.FLOAT32: (VariantKind.FLOAT32, "Float32"),
    VariantType.FLOAT64: (VariantKind.FLOAT64, "Float64"),
}

ELEMENT_SIZES = {
    VariantType.U8: 1,
    VariantType.S16: 2,
    VariantType.U16: 2,
    VariantType.S32: 4,
    VariantType.U32: 4,
    VariantType.FLOAT32: 4,
    VariantType.FLOAT64: 8,
}

STRING_CONVERSION_FAILED = "[String conversion failed]"
EMPTY_ARRAY_DISPLAY = "SafeArray(empty)"


def element_size(element_kind: Optional[int]) -> int:
    """Size in bytes of one array element; unknown kinds count as one byte."""
    return ELEMENT_SIZES.get(element_kind, 1)


def format_hex_preview(data: bytes, total_size: int, limit: int = HEX_PREVIEW_BYTES) -> str:
    """
    Render a space-separated lower-case hex preview.

    Args:
        data: Bytes available for the preview
        total_size: Declared size of the whole array
        limit: Maximum number of bytes rendered

    Returns:
        str: Hex pairs, followed by the truncation marker when the preview
            covers fewer bytes than ``total_size``
    """
    preview = bytes(data[:limit])
    rendered = " ".join(f"{b:02x}" for b in preview)
    if len(preview) < total_size:
        rendered += HEX_TRUNCATION_MARKER
    return rendered


def _decode_text(payload: Any) -> Optional[str]:
    # str is the direct path; bytes-like payloads are copied and decoded
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (bytes, bytearray, memoryview)):
        try:
            return bytes(payload).decode("utf-8")
        except UnicodeDecodeError:
            return None
    return None


def _decode_safe_array(tag: int, array: Optional[SafeArray]) -> ByteArrayValue:
    if array is None or not array.data or array.element_count <= 0:
        return ByteArrayValue(
            tag=tag,
            display=EMPTY_ARRAY_DISPLAY,
            element_count=array.element_count if array is not None else 0,
            element_kind=array.variant_type if array is not None else None,
        )

    total_size = element_size(array.variant_type) * array.element_count
    raw_bytes = bytes(array.data[:min(total_size, MAX_RAW_BYTES)])

    lines = [
        "SafeArray details:",
        f"  Element count: {array.element_count}",
        f"  Variant type: {int(array.variant_type)}",
        f"  Total size: {total_size} bytes",
        f"  Hex data (first {HEX_PREVIEW_BYTES} bytes): {format_hex_preview(raw_bytes, total_size)}",
    ]

    return ByteArrayValue(
        tag=tag,
        display="\n".join(lines),
        raw_bytes=raw_bytes,
        element_count=array.element_count,
        element_kind=array.variant_type,
        total_size=total_size,
    )


def decode_variant(variant: Variant) -> AttributeValue:
    """
    Decode one tagged value into an attribute value.

    Args:
        variant: Value returned by the codec for one attribute

    Returns:
        AttributeValue: exactly one decoded case; never raises for unknown tags
    """
    tag = int(variant.vt)

    if tag == VariantType.EMPTY:
        return EmptyValue(tag=tag, display="Empty value")

    if tag == VariantType.STRING:
        text = _decode_text(variant.value)
        if text is None:
            return TextValue(tag=tag, raw_text="", display=f"String value: {STRING_CONVERSION_FAILED}")
        return TextValue(tag=tag, raw_text=text, display=f"String value: {text}")

    if tag == VariantType.SAFE_ARRAY:
        return _decode_safe_array(tag, variant.value)

    if tag in SCALAR_KINDS:
        kind, label = SCALAR_KINDS[VariantType(tag)]
        return ScalarValue(kind=kind, tag=tag, value=variant.value, display=f"{label} value: {variant.value}")

    return UnknownValue(tag=tag, display=f"Unknown type: {tag}")


def unavailable_value(reason: Optional[str] = None) -> UnavailableValue:
    """Value recorded for an attribute whose query failed."""
    if reason:
        return UnavailableValue(display=f"Failed to retrieve ({reason})")
    return UnavailableValue(display="Failed to retrieve")
