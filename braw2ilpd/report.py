"""
Detailed attribute report for the braw2ilpd tool.

Renders every cached attribute, in table order, into a plain-text report.
"""

import datetime
from typing import Optional

from .attributes import IMMERSIVE_ATTRIBUTES
from .models import AttributeSet, UnavailableValue, WriteResult
from .output import write_atomic

REPORT_TITLE = "Complete Blackmagic RAW Immersive Video Attribute List (Detailed)"
NOT_RETRIEVED = "Not retrieved"


def render_report(input_hint: str, primary_path: str, attrs: AttributeSet,
                  generated_at: Optional[datetime.datetime] = None) -> str:
    """
    Render the detailed attribute report.

    Args:
        input_hint: Path of the input clip
        primary_path: Final path of the ILPD file
        attrs: Extracted attributes
        generated_at: Timestamp for the "Generated on" line; now when None

    Returns:
        str: Report text; identical inputs give identical text
    """
    if generated_at is None:
        generated_at = datetime.datetime.now()

    lines = [
        REPORT_TITLE,
        "=" * 61,
        "",
        f"Input file: {input_hint}",
        f"ILPD file: {primary_path}",
        f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
    ]

    for index, spec in enumerate(IMMERSIVE_ATTRIBUTES, start=1):
        value = attrs.get(spec.attribute)

        if value is None or isinstance(value, UnavailableValue):
            type_label = "Failed to retrieve"
        else:
            type_label = str(value.tag)

        lines.append(f"[{index}] {spec.name} (type: {type_label})")
        lines.append(f"Description: {spec.description}")
        lines.append(value.display if value is not None else NOT_RETRIEVED)
        lines.append("")
        lines.append("-" * 40)
        lines.append("")

    return "\n".join(lines) + "\n"


def save_report(report_path: str, input_hint: str, primary_path: str, attrs: AttributeSet,
                generated_at: Optional[datetime.datetime] = None) -> WriteResult:
    """Render the report and write it atomically to report_path."""
    content = render_report(input_hint, primary_path, attrs, generated_at=generated_at)
    return write_atomic(report_path, content)
