"""
Configuration package for the braw2ilpd tool.

Re-exports all configuration components.
"""

from .constants import (
    MAX_RAW_BYTES,
    HEX_PREVIEW_BYTES,
    HEX_TRUNCATION_MARKER,
    ILPD_EXTENSION,
    DEFAULT_UUID,
    DEFAULT_CAMERA,
    REPORT_SUFFIX,
    TEMP_SUFFIX,
)
from .settings import Config, load_settings
from .logging import setup_logging, console

__all__ = [
    # Constants
    'MAX_RAW_BYTES',
    'HEX_PREVIEW_BYTES',
    'HEX_TRUNCATION_MARKER',
    'ILPD_EXTENSION',
    'DEFAULT_UUID',
    'DEFAULT_CAMERA',
    'REPORT_SUFFIX',
    'TEMP_SUFFIX',

    # Classes
    'Config',

    # Functions and objects
    'load_settings',
    'setup_logging',
    'console',
]
