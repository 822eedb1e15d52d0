import re
from enum import Enum
from typing import Optional

# Greedy prefix so the group captures whatever follows the last dot.
_EXTENSION_RE = re.compile(r".*\.([^.]*)", re.DOTALL)


class ImageFormat(Enum):
    JPEG = ("jpg", "image/jpeg", "JPEG")
    PNG = ("png", "image/png", "PNG")

    def __init__(self, extension: str, mime_type: str, codec: str):
        self.extension = extension
        self.mime_type = mime_type
        self.codec = codec

    @classmethod
    def from_extension(cls, extension: str) -> Optional["ImageFormat"]:
        for fmt in cls:
            if fmt.extension == extension:
                return fmt
        return None


def extension_of(key: str) -> Optional[str]:
    """Return the text after the last '.' in key, or None when there is no dot."""
    match = _EXTENSION_RE.fullmatch(key)
    if match is None:
        return None
    return match.group(1)

