class ResizerError(Exception):
    pass


class ConfigurationError(ResizerError):
    pass


class DecodeError(ResizerError):
    pass


class EncodeError(ResizerError):
    pass


class UploadError(ResizerError):
    """The destination store rejected the write of a finished thumbnail."""

    def __init__(self, bucket: str, key: str, detail: str):
        super().__init__(f"Upload to {bucket}/{key} failed: {detail}")
        self.bucket = bucket
        self.key = key
        self.detail = detail
