"""Single-shot thumbnail pipeline.

Each record is validated, fetched, decoded, scaled, encoded and uploaded in
turn. Validation problems skip the record and return an empty result;
anything that breaks after validation raises.
"""
import logging

from resizer import imaging
from resizer.config import ResizeSettings
from resizer.events import ResizeJob, extract_records, validate

logger = logging.getLogger(__name__)

OK = "Ok"
SKIPPED = ""


def resize_job(job: ResizeJob, storage, settings: ResizeSettings) -> str:
    source, destination = job.source, job.destination

    data = storage.fetch(source.bucket, source.key)
    logger.debug("Fetched %s/%s (%d bytes)", source.bucket, source.key, len(data))

    image = imaging.decode(data)
    logger.debug("Decoded %s %dx%d", image.format, image.width, image.height)

    resized, plan = imaging.scale(image, settings.max_width, settings.max_height)
    logger.debug("Scaled to %dx%d", plan.width, plan.height)

    body, metadata = imaging.encode(resized, job.image_format)
    logger.debug("Encoded %d bytes of %s", metadata.content_length, metadata.content_type)

    logger.info("Writing to: %s/%s", destination.bucket, destination.key)
    storage.upload(destination.bucket, destination.key, body, metadata)

    logger.info(
        "Successfully resized %s/%s and uploaded to %s/%s",
        source.bucket,
        source.key,
        destination.bucket,
        destination.key,
    )
    return OK


def process_record(record: dict, storage, settings: ResizeSettings) -> str:
    job = validate(record, settings)
    if job is None:
        logger.debug("Record skipped")
        return SKIPPED
    return resize_job(job, storage, settings)


def run(event: dict, storage, settings: ResizeSettings) -> str:
    """Process a notification and return "Ok" or "" (skipped).

    Decode, encode and fetch failures propagate as raised. UploadError is
    raised too; deciding how hard to fail on it is left to the caller.
    """
    records = extract_records(event, process_all=settings.process_all_records)
    if not records:
        logger.info("Notification carried no records")
        return SKIPPED

    logger.debug("Processing %d record(s)", len(records))
    results = [process_record(record, storage, settings) for record in records]
    return OK if OK in results else SKIPPED
