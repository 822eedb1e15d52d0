import json
import logging
import urllib.parse
from dataclasses import dataclass
from typing import Optional

from resizer.config import ResizeSettings
from resizer.formats import ImageFormat, extension_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceReference:
    bucket: str
    key: str


@dataclass(frozen=True)
class DestinationReference:
    bucket: str
    key: str


@dataclass(frozen=True)
class ResizeJob:
    source: SourceReference
    destination: DestinationReference
    image_format: ImageFormat


def _storage_records(record: dict) -> list:
    # Queue deliveries carry the storage notification as a JSON body.
    if record.get("eventSource") == "aws:sqs":
        body = record.get("body") or "{}"
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")
        payload = json.loads(body) if isinstance(body, str) else body
        if not isinstance(payload, dict):
            logger.info("Skipping queue message whose body is not a notification")
            return []
        return list(payload.get("Records", []))
    return [record]


def extract_records(event: dict, process_all: bool = False) -> list:
    """Flatten an incoming notification into storage records.

    Only the first record is returned unless process_all is set.
    """
    records = []
    for record in event.get("Records", []):
        records.extend(_storage_records(record))
        if records and not process_all:
            return records[:1]
    return records


def source_from_record(record: dict) -> Optional[SourceReference]:
    s3_info = record.get("s3", {})
    bucket = s3_info.get("bucket", {}).get("name")
    key = s3_info.get("object", {}).get("key")

    if not bucket or not key:
        return None

    # Keys arrive form-encoded: spaces as '+', non-ASCII as %XX.
    return SourceReference(bucket=bucket, key=urllib.parse.unquote_plus(key))


def destination_for(source: SourceReference, settings: ResizeSettings) -> DestinationReference:
    return DestinationReference(
        bucket=f"{source.bucket}{settings.bucket_suffix}",
        key=f"{settings.key_prefix}{source.key}",
    )


def validate(record: dict, settings: ResizeSettings) -> Optional[ResizeJob]:
    """Turn one storage record into a ResizeJob, or None when it is not ours to process."""
    source = source_from_record(record)
    if source is None:
        logger.info("Skipping record without bucket name or object key")
        return None

    destination = destination_for(source, settings)

    if source.bucket == destination.bucket:
        logger.warning("Destination bucket must not match source bucket.")
        return None

    extension = extension_of(source.key)
    if extension is None:
        logger.info("Unable to infer image type for key %s", source.key)
        return None

    image_format = ImageFormat.from_extension(extension)
    if image_format is None:
        logger.info("Skipping non-image %s", source.key)
        return None

    return ResizeJob(source=source, destination=destination, image_format=image_format)
