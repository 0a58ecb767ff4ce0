"""
Output naming for the braw2ilpd tool.

Two steps:
- synthesize_output_name() derives the default ``<camera>.<uuid>.ilpd`` name
  from the extracted attributes, with layered fallbacks
- resolve_output_path() maps the user's output argument onto a final path,
  keeping the user's absolute or relative style

report_path_for() derives the detailed report path from the primary path.
"""

import os
from typing import Optional

import structlog

from .attributes import ImmersiveAttribute
from .config.constants import DEFAULT_CAMERA, DEFAULT_UUID, ILPD_EXTENSION, REPORT_SUFFIX
from .models import AttributeSet, OutputPlan

logger = structlog.get_logger(__name__)

_SEPARATORS = tuple(s for s in (os.sep, os.altsep) if s)


class OutputPathError(Exception):
    """Error resolving output path."""
    pass


def _split_ilpd_file_name(file_name: str):
    """Split an ILPD file name into (camera, uuid); uuid is None without an internal dot."""
    stem = os.path.splitext(os.path.basename(file_name.strip()))[0]
    index = stem.rfind(".")
    if 0 < index < len(stem) - 1:
        return stem[:index], stem[index + 1:]
    return stem or None, None


def _name_component(text: Optional[str]) -> Optional[str]:
    """Confine one name component to a single path segment; None when nothing usable is left."""
    if not text:
        return None
    for separator in _SEPARATORS:
        text = text.replace(separator, "_")
    text = text.replace("\0", "").strip()
    if not text.strip("."):
        return None
    return text


def synthesize_output_name(input_hint: str, attrs: AttributeSet) -> str:
    """
    Derive the default output file name from the extracted attributes.

    Fallback order:
    1. ILPD file name attribute, split into camera and uuid at its last dot
    2. Lens processing data UUID attribute for the uuid
    3. Stem of the input path for the camera
    4. "default" for whatever is still missing

    Args:
        input_hint: Path of the input clip
        attrs: Extracted attributes

    Returns:
        str: "<camera>.<uuid>.ilpd"
    """
    camera: Optional[str] = None
    uuid: Optional[str] = None

    ilpd_file_name = attrs.text_of(ImmersiveAttribute.ILPD_FILE_NAME)
    if ilpd_file_name:
        camera, uuid = (_name_component(part) for part in _split_ilpd_file_name(ilpd_file_name))

    if not uuid:
        uuid = _name_component(attrs.text_of(ImmersiveAttribute.LENS_PROCESSING_DATA_FILE_UUID))

    if not camera and input_hint:
        camera = _name_component(os.path.splitext(os.path.basename(input_hint))[0])

    camera = camera or DEFAULT_CAMERA
    uuid = uuid or DEFAULT_UUID

    name = f"{camera}.{uuid}{ILPD_EXTENSION}"
    logger.debug("Synthesized output name", name=name, camera=camera, uuid=uuid)
    return name


def _has_trailing_separator(path: str) -> bool:
    return path.endswith(_SEPARATORS)


def resolve_output_path(user_arg: Optional[str], auto_name: str) -> OutputPlan:
    """
    Resolve the final path of the primary ILPD file.

    Rules applied:
    1. Empty or "." → auto_name in the current directory (relative)
    2. Existing directory → directory / auto_name
    3. Existing file → that file, overwritten
    4. New path without extension, or with a trailing separator → created
       as a directory, then directory / auto_name
    5. New path with extension → used verbatim, parents created; an advisory
       is attached when the extension is not .ilpd

    Args:
        user_arg: Output argument as given by the user
        auto_name: Name from synthesize_output_name()

    Returns:
        OutputPlan: final path and whether the user path was absolute

    Raises:
        OutputPathError: If a required directory cannot be created
    """
    if not user_arg or user_arg == ".":
        return OutputPlan(path=auto_name, is_absolute=False)

    target = os.path.expanduser(user_arg)
    is_absolute = os.path.isabs(target)

    if os.path.isdir(target):
        return OutputPlan(path=os.path.join(target, auto_name), is_absolute=is_absolute)

    if os.path.exists(target):
        logger.info("Output file exists and will be overwritten", path=target)
        return OutputPlan(path=target, is_absolute=is_absolute)

    extension = os.path.splitext(os.path.basename(target.rstrip("".join(_SEPARATORS))))[1]

    if _has_trailing_separator(target) or not extension:
        try:
            os.makedirs(target, exist_ok=True)
        except (OSError, ValueError) as e:
            raise OutputPathError(f"Failed to create output directory {target}: {e}") from e
        logger.info("Created output directory", path=target)
        return OutputPlan(path=os.path.join(target, auto_name), is_absolute=is_absolute)

    parent = os.path.dirname(target)
    if parent:
        try:
            os.makedirs(parent, exist_ok=True)
        except (OSError, ValueError) as e:
            raise OutputPathError(f"Failed to create output directory {parent}: {e}") from e

    advisory = None
    if extension.lower() != ILPD_EXTENSION:
        advisory = f"Output file extension '{extension}' is not {ILPD_EXTENSION}"
        logger.warning("Unexpected output extension", path=target, extension=extension)

    return OutputPlan(path=target, is_absolute=is_absolute, advisory=advisory)


def report_path_for(plan: OutputPlan) -> str:
    """
    Derive the detailed report path next to the primary file.

    Args:
        plan: Resolved primary output plan

    Returns:
        str: primary path with its extension replaced by the report suffix,
            absolute when the user asked for an absolute path
    """
    base, _ = os.path.splitext(plan.path)
    report_path = f"{base}{REPORT_SUFFIX}"
    if plan.is_absolute:
        return os.path.abspath(report_path)
    return report_path
