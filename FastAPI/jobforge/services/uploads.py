import logging
import re
from pathlib import Path

import boto3
from botocore.config import Config

from jobforge.config import settings
from jobforge.core.security import generate_id

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


def max_bytes_for(kind: str) -> int:
    mb = settings.max_logo_upload_mb if kind == "logo" else settings.max_resume_upload_mb
    return mb * 1024 * 1024


def is_allowed_content_type(kind: str, content_type: str) -> bool:
    if kind == "logo":
        return content_type.startswith("image/")
    return content_type == "application/pdf"


def object_key(kind: str, user_id: str, filename: str) -> str:
    name = _SAFE_NAME.sub("-", Path(filename).name).strip("-") or "file"
    return f"{kind}s/{user_id}/{generate_id()}-{name}"


def public_url(key: str) -> str:
    return f"https://{settings.upload_bucket}.s3.{settings.aws_region}.amazonaws.com/{key}"


def presign_upload(kind: str, user_id: str, filename: str, content_type: str) -> dict:
    """Presigned S3 POST for a logo or resume. Returns url, fields, file_url and max_bytes."""
    key = object_key(kind, user_id, filename)
    max_bytes = max_bytes_for(kind)
    client = boto3.client(
        "s3",
        region_name=settings.aws_region,
        config=Config(connect_timeout=10, read_timeout=30),
    )
    post = client.generate_presigned_post(
        Bucket=settings.upload_bucket,
        Key=key,
        Fields={"Content-Type": content_type},
        Conditions=[
            {"Content-Type": content_type},
            ["content-length-range", 1, max_bytes],
        ],
        ExpiresIn=settings.upload_url_expire_seconds,
    )
    logger.info("Presigned %s upload for user=%s key=%s", kind, user_id, key)
    return {
        "url": post["url"],
        "fields": post["fields"],
        "file_url": public_url(key),
        "max_bytes": max_bytes,
    }
