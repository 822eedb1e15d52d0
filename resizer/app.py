import logging
import os
import sys

import boto3

from resizer.config import ResizeSettings
from resizer.exceptions import UploadError
from resizer.pipeline import run
from resizer.storage import S3Storage

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

s3 = boto3.client("s3")


def lambda_handler(event, context):
    settings = ResizeSettings.from_env()
    storage = S3Storage(s3)

    try:
        return run(event, storage, settings)
    except UploadError as e:
        # A finished thumbnail that cannot be written takes the process down.
        logger.error(e.detail)
        sys.exit(1)
