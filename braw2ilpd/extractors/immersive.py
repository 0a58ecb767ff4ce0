"""
Immersive attribute extraction for the braw2ilpd tool.

Queries every attribute of the fixed table exactly once and caches the
decoded values in an AttributeSet.
"""

import structlog

from ..attributes import IMMERSIVE_ATTRIBUTES
from ..models import AttributeSet, VariantKind
from ..sdk import ImmersiveClip
from .variant import decode_variant, unavailable_value

logger = structlog.get_logger(__name__)


def extract_immersive_attributes(clip: ImmersiveClip) -> AttributeSet:
    """
    Extract and decode all immersive attributes from a clip.

    A failed query or decode is recorded as an unavailable value and
    extraction moves on to the next attribute.

    Args:
        clip: Immersive interface of an open clip

    Returns:
        AttributeSet: one entry per attribute, in table order
    """
    items = []

    for spec in IMMERSIVE_ATTRIBUTES:
        try:
            variant = clip.get_immersive_attribute(spec.attribute)
            value = decode_variant(variant)
        except Exception as e:
            logger.warning("Failed to retrieve attribute", attribute=spec.name, error=str(e))
            items.append((spec.attribute, unavailable_value(str(e))))
            continue

        logger.info("Retrieved attribute", attribute=spec.name, type=variant.vt, kind=value.kind.value)
        items.append((spec.attribute, value))

    attrs = AttributeSet(items)
    unavailable = sum(1 for value in attrs.values() if value.kind == VariantKind.UNAVAILABLE)
    logger.debug("Attribute extraction complete", total=len(attrs), unavailable=unavailable)

    return attrs
