"""Constants for license-notice."""

# Exit codes
EXIT_SUCCESS = 0  # Notice generated
EXIT_ERROR = 2  # Generation failed due to error

# Section delimiter emitted before each notice section
HORIZONTAL_RULE = "=" * 78

# Conventional build-output root for installed paths
DEFAULT_OUTPUT_ROOT = "out"

# Indentation for installed paths under a "used by:" line
USED_BY_INDENT = "  "
