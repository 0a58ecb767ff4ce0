"""
Immersive video attribute table for the braw2ilpd tool.

Single ordered table of the attributes queried from a clip. Extraction and
report rendering both iterate this table, so its order is the canonical order.
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class ImmersiveAttribute(str, Enum):
    """Identity of an immersive attribute exposed by the codec."""
    LENS_PROCESSING_DATA_FILE_UUID = "opticalLensProcessingDataFileUUID"
    ILPD_FILE_NAME = "opticalILPDFileName"
    INTERAXIAL = "opticalInteraxial"
    PROJECTION_KIND = "opticalProjectionKind"
    CALIBRATION_TYPE = "opticalCalibrationType"
    PROJECTION_DATA = "opticalProjectionData"


class AttributeSpec(BaseModel):
    """Name and description of one immersive attribute."""
    model_config = ConfigDict(frozen=True)

    attribute: ImmersiveAttribute
    name: str
    description: str


IMMERSIVE_ATTRIBUTES: Tuple[AttributeSpec, ...] = (
    AttributeSpec(
        attribute=ImmersiveAttribute.LENS_PROCESSING_DATA_FILE_UUID,
        name="OpticalLensProcessingDataFileUUID",
        description="UUID of the projection data file",
    ),
    AttributeSpec(
        attribute=ImmersiveAttribute.ILPD_FILE_NAME,
        name="OpticalILPDFileName",
        description="Name of the ILPD projection data file",
    ),
    AttributeSpec(
        attribute=ImmersiveAttribute.INTERAXIAL,
        name="OpticalInteraxial",
        description="Interaxial lens separation",
    ),
    AttributeSpec(
        attribute=ImmersiveAttribute.PROJECTION_KIND,
        name="OpticalProjectionKind",
        description="Projection kind set to 'fish' to indicate Apple immersive video",
    ),
    AttributeSpec(
        attribute=ImmersiveAttribute.CALIBRATION_TYPE,
        name="OpticalCalibrationType",
        description="Calibration type set to 'meiRives' to indicate ILPD lens projection",
    ),
    AttributeSpec(
        attribute=ImmersiveAttribute.PROJECTION_DATA,
        name="OpticalProjectionData",
        description="The contents of the projection data file",
    ),
)
