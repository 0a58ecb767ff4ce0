"""
Constants for the braw2ilpd tool.

Contains all constant values used throughout the application.
"""

# Byte-array handling limits for decoded attribute values
MAX_RAW_BYTES = 64 * 1024   # Bounded copy kept in memory per attribute
HEX_PREVIEW_BYTES = 512     # Bytes rendered in the human-readable hex preview
HEX_TRUNCATION_MARKER = " ... (truncated)"

# Output naming
ILPD_EXTENSION = ".ilpd"
DEFAULT_UUID = "default"
DEFAULT_CAMERA = "default"

# Detailed report naming
REPORT_SUFFIX = "_detailed_attributes.txt"

# Sibling path used by the atomic writer before the final rename
TEMP_SUFFIX = ".tmp"

# Process exit codes
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FACTORY_FAILED = 2
EXIT_CODEC_FAILED = 3
EXIT_OPEN_CLIP_FAILED = 4
EXIT_NOT_IMMERSIVE = 5
EXIT_WRITE_FAILED = 7
