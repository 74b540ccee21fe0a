import os


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


LOG_LEVEL = os.getenv("TT_LOG_LEVEL") or "warn"
OUTPUT_FORMAT = os.getenv("TT_OUTPUT_FORMAT") or "json"

STRICT_TAGS = _flag(os.getenv("TT_STRICT_TAGS") or "false")
STRICT_TYPES = _flag(os.getenv("TT_STRICT_TYPES") or "false")
USE_ANNOTATIONS = _flag(os.getenv("TT_USE_ANNOTATIONS") or "true")

# POSITIONAL_OR_KEYWORD parameters can always be passed by name in Python,
# but are rejected unless this is switched on
ALLOW_POSITIONAL_OR_KEYWORD = _flag(
    os.getenv("TT_ALLOW_POSITIONAL_OR_KEYWORD") or "false"
)
