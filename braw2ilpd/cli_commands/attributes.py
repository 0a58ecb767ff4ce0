"""
Attributes command class.

Lists the fixed immersive attribute table queried from every clip.
"""

from typing import Dict, Any

from . import BaseCommand
from ..attributes import IMMERSIVE_ATTRIBUTES


class AttributesCommand(BaseCommand):
    """Command class for describing the immersive attribute table."""

    def execute(self, **kwargs) -> Dict[str, Any]:
        attributes = [
            {
                'index': index,
                'identity': spec.attribute.value,
                'name': spec.name,
                'description': spec.description,
            }
            for index, spec in enumerate(IMMERSIVE_ATTRIBUTES, start=1)
        ]
        return {
            "success": True,
            "data": {
                "attributes": attributes,
                "total": len(attributes),
            }
        }
