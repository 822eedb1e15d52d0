import os
from dataclasses import dataclass
from typing import Mapping, Optional

from resizer.exceptions import ConfigurationError

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ResizeSettings:
    max_width: int = 100
    max_height: int = 100
    bucket_suffix: str = "-resized"
    key_prefix: str = "resized-"
    process_all_records: bool = False

    def __post_init__(self):
        if self.max_width <= 0 or self.max_height <= 0:
            raise ConfigurationError(
                f"Bounding box must be positive, got {self.max_width}x{self.max_height}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ResizeSettings":
        env = os.environ if environ is None else environ
        return cls(
            max_width=_int_from(env, "MAX_WIDTH", cls.max_width),
            max_height=_int_from(env, "MAX_HEIGHT", cls.max_height),
            bucket_suffix=env.get("DESTINATION_BUCKET_SUFFIX", cls.bucket_suffix),
            key_prefix=env.get("DESTINATION_KEY_PREFIX", cls.key_prefix),
            process_all_records=env.get("PROCESS_ALL_RECORDS", "false").strip().lower() in _TRUTHY,
        )


def _int_from(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
