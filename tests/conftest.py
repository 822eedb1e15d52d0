import io
import os

import pytest
from botocore.exceptions import ClientError
from PIL import Image

os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")


class FakeBody:
    def __init__(self, data: bytes):
        self._data = data

    def read(self) -> bytes:
        return self._data


class FakeS3:
    """In-memory stand-in for the two S3 calls the resizer makes."""

    def __init__(self):
        self.objects = {}
        self.get_calls = []
        self.put_calls = []
        self.fail_uploads = False

    def get_object(self, Bucket, Key):
        self.get_calls.append((Bucket, Key))
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            )
        return {"Body": FakeBody(self.objects[(Bucket, Key)])}

    def put_object(self, Bucket, Key, Body, ContentLength, ContentType):
        if self.fail_uploads:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "PutObject",
            )
        data = Body.read()
        self.put_calls.append(
            {"Bucket": Bucket, "Key": Key, "ContentLength": ContentLength, "ContentType": ContentType}
        )
        self.objects[(Bucket, Key)] = data
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}


def make_image(width: int, height: int, fmt: str = "PNG", mode: str = "RGB", color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def s3_event(bucket: str, *keys: str) -> dict:
    return {
        "Records": [
            {
                "eventSource": "aws:s3",
                "s3": {"bucket": {"name": bucket}, "object": {"key": key}},
            }
            for key in keys
        ]
    }


@pytest.fixture
def fake_s3() -> FakeS3:
    return FakeS3()
