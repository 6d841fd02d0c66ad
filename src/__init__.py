"""Image Gallery Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Authenticated image gallery API on AWS Lambda, S3, and DynamoDB"
)

__all__ = ["handlers", "core", "gallery_client"]
