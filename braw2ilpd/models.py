"""
Models for the braw2ilpd tool.

Contains the Pydantic models for decoded attribute values, the attribute set
built from one clip, and the results reported for each written artifact.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .attributes import ImmersiveAttribute


# ===== Attribute Value Models =====

class VariantKind(str, Enum):
    EMPTY = "empty"
    U8 = "u8"
    S16 = "s16"
    U16 = "u16"
    S32 = "s32"
    U32 = "u32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    TEXT = "text"
    BYTE_ARRAY = "byte_array"
    UNKNOWN = "unknown"
    UNAVAILABLE = "unavailable"


class _ValueBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    display: str


class EmptyValue(_ValueBase):
    kind: Literal[VariantKind.EMPTY] = VariantKind.EMPTY
    tag: int


class ScalarValue(_ValueBase):
    """Numeric value; ``kind`` says which width and signedness it had."""
    kind: Literal[
        VariantKind.U8, VariantKind.S16, VariantKind.U16, VariantKind.S32,
        VariantKind.U32, VariantKind.FLOAT32, VariantKind.FLOAT64,
    ]
    tag: int
    value: Union[int, float]


class TextValue(_ValueBase):
    kind: Literal[VariantKind.TEXT] = VariantKind.TEXT
    tag: int
    raw_text: str


class ByteArrayValue(_ValueBase):
    """Array value. ``raw_bytes`` is a bounded copy, independent of the preview."""
    kind: Literal[VariantKind.BYTE_ARRAY] = VariantKind.BYTE_ARRAY
    tag: int
    raw_bytes: bytes = b""
    element_count: int = 0
    element_kind: Optional[int] = None
    total_size: int = 0


class UnknownValue(_ValueBase):
    kind: Literal[VariantKind.UNKNOWN] = VariantKind.UNKNOWN
    tag: int


class UnavailableValue(_ValueBase):
    """The attribute could not be queried. Only ``display`` is set."""
    kind: Literal[VariantKind.UNAVAILABLE] = VariantKind.UNAVAILABLE


AttributeValue = Annotated[
    Union[EmptyValue, ScalarValue, TextValue, ByteArrayValue, UnknownValue, UnavailableValue],
    Field(discriminator="kind"),
]


class AttributeSet(Mapping):
    """
    Immutable ordered mapping from attribute identity to decoded value.

    Each identity may appear once; order is insertion order, which the
    extractor keeps identical to the attribute table.
    """

    def __init__(self, items: Iterable[Tuple[ImmersiveAttribute, AttributeValue]] = ()):
        values: Dict[ImmersiveAttribute, AttributeValue] = {}
        for attribute, value in items:
            if attribute in values:
                raise ValueError(f"Duplicate attribute in set: {attribute.value}")
            values[attribute] = value
        self._values = values

    def __getitem__(self, attribute: ImmersiveAttribute) -> AttributeValue:
        return self._values[attribute]

    def __iter__(self) -> Iterator[ImmersiveAttribute]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        kinds = ", ".join(f"{a.value}={v.kind.value}" for a, v in self._values.items())
        return f"AttributeSet({kinds})"

    def text_of(self, attribute: ImmersiveAttribute) -> Optional[str]:
        """Return the decoded text of an attribute, or None if missing or empty."""
        value = self._values.get(attribute)
        if isinstance(value, TextValue) and value.raw_text:
            return value.raw_text
        return None

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """JSON-friendly view; byte payloads are summarized by length."""
        result = {}
        for attribute, value in self._values.items():
            data = value.model_dump(mode="json", exclude={"raw_bytes"})
            if isinstance(value, ByteArrayValue):
                data["raw_bytes_length"] = len(value.raw_bytes)
            result[attribute.value] = data
        return result


# ===== Output Models =====

class OutputPlan(BaseModel):
    """Final path of the primary payload and whether the user asked for an absolute path."""
    model_config = ConfigDict(frozen=True)

    path: str
    is_absolute: bool = False
    advisory: Optional[str] = None


class WriteResult(BaseModel):
    success: bool
    path: str
    error: Optional[str] = None


class ArtifactResult(BaseModel):
    """Outcome for one artifact: written, skipped (warning) or failed (error)."""
    status: Literal["written", "skipped", "failed"]
    path: Optional[str] = None
    message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class ExtractionResult(BaseModel):
    input_path: str
    output_name: str
    primary: ArtifactResult
    report: Optional[ArtifactResult] = None
    warnings: List[str] = Field(default_factory=list)
    attributes: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        if self.primary.failed:
            return False
        return not (self.report is not None and self.report.failed)
