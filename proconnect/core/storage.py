import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError
from fastapi import HTTPException, UploadFile
from supabase import Client

from proconnect.config import settings
from proconnect.core.errors import service_error

logger = logging.getLogger(__name__)


def file_extension(filename: Optional[str]) -> str:
    """Text after the last dot of the filename (the whole name when there is no dot)."""
    return (filename or "").rsplit(".", 1)[-1].lower()


async def read_image(file: UploadFile) -> bytes:
    """Read an uploaded image, rejecting non-images and oversized files."""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")
    content = await file.read()
    if len(content) > settings.max_upload_size:
        raise HTTPException(status_code=413, detail="Image is too large")
    if not content:
        raise HTTPException(status_code=400, detail="Image file is empty")
    return content


class S3Storage:
    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def public_url(self, key: str) -> str:
        if settings.s3_public_base_url:
            return f"{settings.s3_public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload (or overwrite) an object and return its public URL"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type
            )
            return self.public_url(key)
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise


class MediaStorage:
    """Stores post images and avatars, in S3 when configured, else in Supabase Storage.

    S3 keys are prefixed with the Supabase bucket name so both backends lay
    objects out the same way.
    """

    def __init__(self, supabase: Client, s3_storage: Optional[S3Storage] = None):
        self.supabase = supabase
        self.s3_storage = s3_storage
        if self.s3_storage is None and settings.s3_configured:
            try:
                self.s3_storage = S3Storage()
            except Exception as e:
                logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
                self.s3_storage = None

    def upload(self, bucket: str, path: str, content: bytes, content_type: str, upsert: bool = False) -> str:
        """Upload ``content`` to ``bucket/path`` and return the public URL."""
        if self.s3_storage:
            key = f"{bucket}/{path}"
            logger.info(f"Uploading to S3: {key}")
            try:
                # put_object always overwrites
                return self.s3_storage.upload_file(content, key, content_type)
            except Exception as e:
                raise service_error(e, "Failed to upload image", default_status=502)

        logger.info(f"Uploading to Supabase Storage: {bucket}/{path}")
        try:
            bucket_api = self.supabase.storage.from_(bucket)
            bucket_api.upload(
                path,
                content,
                file_options={"content-type": content_type, "upsert": "true" if upsert else "false"}
            )
            return bucket_api.get_public_url(path)
        except Exception as e:
            raise service_error(e, "Failed to upload image", default_status=502)
