import pytest
from pydantic import TypeAdapter

from braw2ilpd.extractors.variant import decode_variant, format_hex_preview, unavailable_value
from braw2ilpd.models import (
    AttributeValue,
    ByteArrayValue,
    EmptyValue,
    ScalarValue,
    TextValue,
    UnavailableValue,
    UnknownValue,
    VariantKind,
)
from braw2ilpd.sdk import SafeArray, Variant, VariantType
from braw2ilpd.tests.fakes import SAMPLE_ILPD, byte_array


def _hex_pairs(display: str):
    line = next(l for l in display.splitlines() if l.strip().startswith("Hex data"))
    hex_part = line.split("): ", 1)[1].replace(" ... (truncated)", "")
    return hex_part.split(" ") if hex_part else []


# --- Text ---

def test_text_from_str_is_kept_verbatim():
    value = decode_variant(Variant(vt=VariantType.STRING, value=SAMPLE_ILPD))

    assert isinstance(value, TextValue)
    assert value.kind == VariantKind.TEXT
    assert value.raw_text == SAMPLE_ILPD
    assert value.display == f"String value: {SAMPLE_ILPD}"


def test_text_from_utf8_bytes_is_decoded():
    value = decode_variant(Variant(vt=VariantType.STRING, value="caméra".encode("utf-8")))

    assert value.raw_text == "caméra"


def test_text_that_cannot_be_decoded_is_marked():
    value = decode_variant(Variant(vt=VariantType.STRING, value=b"\xff\xfe\xfa"))

    assert isinstance(value, TextValue)
    assert value.raw_text == ""
    assert value.display == "String value: [String conversion failed]"


# --- Scalars ---

@pytest.mark.parametrize("vt, raw, kind, display", [
    (VariantType.U8, 7, VariantKind.U8, "U8 value: 7"),
    (VariantType.S16, -3, VariantKind.S16, "S16 value: -3"),
    (VariantType.U16, 65535, VariantKind.U16, "U16 value: 65535"),
    (VariantType.S32, -100000, VariantKind.S32, "S32 value: -100000"),
    (VariantType.U32, 4000000000, VariantKind.U32, "U32 value: 4000000000"),
    (VariantType.FLOAT32, 64.5, VariantKind.FLOAT32, "Float32 value: 64.5"),
    (VariantType.FLOAT64, 0.125, VariantKind.FLOAT64, "Float64 value: 0.125"),
])
def test_scalar_rendering(vt, raw, kind, display):
    value = decode_variant(Variant(vt=vt, value=raw))

    assert isinstance(value, ScalarValue)
    assert value.kind == kind
    assert value.value == raw
    assert value.display == display
    assert not hasattr(value, "raw_text")
    assert not hasattr(value, "raw_bytes")


def test_empty_value():
    value = decode_variant(Variant(vt=VariantType.EMPTY))

    assert isinstance(value, EmptyValue)
    assert value.display == "Empty value"


def test_unknown_tag_keeps_the_numeric_tag():
    value = decode_variant(Variant(vt=42, value=1))

    assert isinstance(value, UnknownValue)
    assert value.tag == 42
    assert value.display == "Unknown type: 42"


# --- Byte arrays ---

def test_small_byte_array_has_full_preview():
    value = decode_variant(byte_array(4))

    assert isinstance(value, ByteArrayValue)
    assert value.raw_bytes == b"\x00\x01\x02\x03"
    assert value.total_size == 4
    assert "Hex data (first 512 bytes): 00 01 02 03" in value.display
    assert "(truncated)" not in value.display
    assert "Element count: 4" in value.display
    assert not hasattr(value, "raw_text")


def test_large_byte_array_preview_is_truncated_at_512_bytes():
    value = decode_variant(byte_array(1000))

    assert "... (truncated)" in value.display
    assert len(_hex_pairs(value.display)) == 512
    assert len(value.raw_bytes) == 1000
    assert value.total_size == 1000


def test_raw_bytes_are_bounded_to_64_kib():
    value = decode_variant(byte_array(100000))

    assert len(value.raw_bytes) == 65536
    assert value.raw_bytes == bytes(i % 256 for i in range(65536))
    assert len(_hex_pairs(value.display)) == 512


def test_element_size_follows_element_kind():
    # 300 U16 elements = 600 bytes
    value = decode_variant(byte_array(600, element_kind=VariantType.U16, element_count=300))

    assert value.total_size == 600
    assert value.element_count == 300
    assert value.element_kind == VariantType.U16
    assert "Total size: 600 bytes" in value.display
    assert "(truncated)" in value.display


def test_unknown_element_kind_counts_one_byte_per_element():
    value = decode_variant(byte_array(16, element_kind=77))

    assert value.total_size == 16
    assert "(truncated)" not in value.display


@pytest.mark.parametrize("array", [
    None,
    SafeArray(variant_type=VariantType.U8, element_count=0, data=b""),
    SafeArray(variant_type=VariantType.U8, element_count=8, data=None),
])
def test_empty_byte_array(array):
    value = decode_variant(Variant(vt=VariantType.SAFE_ARRAY, value=array))

    assert isinstance(value, ByteArrayValue)
    assert value.display == "SafeArray(empty)"
    assert value.raw_bytes == b""


def test_hex_preview_is_lower_case():
    assert format_hex_preview(b"\xab\xcd\xef", 3) == "ab cd ef"
    assert format_hex_preview(b"\xab", 2) == "ab ... (truncated)"


# --- Failures ---

def test_unavailable_value_carries_only_display():
    value = unavailable_value("GetImmersiveAttribute failed (HRESULT: 0x80004005)")

    assert isinstance(value, UnavailableValue)
    assert value.kind == VariantKind.UNAVAILABLE
    assert value.display.startswith("Failed to retrieve")
    assert set(value.model_dump()) == {"display", "kind"}


@pytest.mark.parametrize("variant", [
    Variant(vt=VariantType.EMPTY),
    Variant(vt=VariantType.S16, value=-3),
    Variant(vt=VariantType.STRING, value="fish"),
    Variant(vt=99),
    byte_array(8),
])
def test_decoded_values_belong_to_the_attribute_value_union(variant):
    decoded = decode_variant(variant)

    restored = TypeAdapter(AttributeValue).validate_python(decoded.model_dump())

    assert type(restored) is type(decoded)
    assert restored == decoded
