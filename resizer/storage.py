import io

from botocore.exceptions import ClientError

from resizer.exceptions import UploadError
from resizer.imaging import UploadMetadata


class S3Storage:
    def __init__(self, s3_client):
        self.s3_client = s3_client

    def fetch(self, bucket: str, key: str) -> bytes:
        # Not-found and access errors propagate to the caller untouched.
        obj = self.s3_client.get_object(Bucket=bucket, Key=key)
        return obj["Body"].read()

    def upload(self, bucket: str, key: str, data: bytes, metadata: UploadMetadata) -> None:
        try:
            self.s3_client.put_object(
                Bucket=bucket,
                Key=key,
                Body=io.BytesIO(data),
                ContentLength=metadata.content_length,
                ContentType=metadata.content_type,
            )
        except ClientError as e:
            detail = e.response.get("Error", {}).get("Message") or str(e)
            raise UploadError(bucket, key, detail) from e
