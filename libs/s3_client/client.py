# libs/s3_client/client.py

import boto3
from botocore.client import Config
from django.conf import settings

# ---------------------------------------------------------------------
# S3 Client (Cloudflare R2)
# ---------------------------------------------------------------------


def build_s3_client():
    return boto3.client(
        "s3",
        region_name="auto",
        endpoint_url=settings.R2_ENDPOINT,
        aws_access_key_id=settings.R2_ACCESS_KEY,
        aws_secret_access_key=settings.R2_SECRET_KEY,
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
        ),
    )


def get_bucket() -> str:
    bucket = getattr(settings, "R2_BUCKET", None)
    if not bucket:
        raise RuntimeError("R2_BUCKET is not set in Django settings")
    return bucket
