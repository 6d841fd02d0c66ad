#!/usr/bin/env python3
"""
Delete every image owned by the user behind --token.

Run:
    python seed/cleanup_images.py --base-url <API-BASE-URL> --token <ID-TOKEN> [--dry-run]
"""

import argparse
import sys

import requests
from aws_lambda_powertools import Logger

from gallery_client.api_client import GalleryApiClient

logger = Logger(service="cleanup")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", required=True, help="API stage URL, e.g. the LocalStack one")
    parser.add_argument("--token", help="Bearer token of the gallery owner")
    parser.add_argument("--dry-run", action="store_true", help="List what would be deleted and stop")
    return parser


def cleanup_images(client: GalleryApiClient, *, dry_run: bool = False) -> int:
    """Delete the caller's images one by one; returns how many failed."""
    images = client.list_images()
    logger.info("Images found", extra={"count": len(images), "dry_run": dry_run})

    failures = 0

    for image in images:
        if dry_run:
            logger.info("Would delete image", extra={"image_id": image["id"], "title": image.get("title")})
            continue

        try:
            client.delete_image(image["id"])
        except requests.HTTPError as exc:
            failures += 1
            logger.error(
                "Failed to delete image",
                extra={"image_id": image["id"], "status": getattr(exc.response, "status_code", None)},
            )
        else:
            logger.info("Deleted image", extra={"image_id": image["id"]})

    return failures


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    client = GalleryApiClient(args.base_url, token=args.token)

    try:
        failures = cleanup_images(client, dry_run=args.dry_run)
    except requests.RequestException:
        logger.exception("Cleanup failed", extra={"base_url": client.base_url})
        return 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
