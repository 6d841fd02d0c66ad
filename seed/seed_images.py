#!/usr/bin/env python3
"""
Upload a directory of images into a gallery, one multipart request per file.

Titles come from the file names: `golden_gate-bridge.jpg` -> "Golden Gate Bridge".

Run:
    python seed/seed_images.py --base-url <API-BASE-URL> --token <ID-TOKEN> --images-dir <DIR>
"""

import argparse
import sys
from pathlib import Path

import requests
from aws_lambda_powertools import Logger

from gallery_client.api_client import GalleryApiClient

logger = Logger(service="seed")

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", required=True, help="API stage URL, e.g. the LocalStack one")
    parser.add_argument("--token", help="Bearer token of the user that will own the images")
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path(__file__).parent / "images",
        help="Directory holding the images to upload",
    )
    parser.add_argument("--limit", type=int, default=4, help="Upload at most this many files")
    return parser


def title_from_path(path: Path) -> str:
    return path.stem.replace("_", " ").replace("-", " ").title()


def find_images(images_dir: Path, limit: int) -> list[Path]:
    return sorted(p for p in images_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)[:limit]


def seed_images(client: GalleryApiClient, paths: list[Path]) -> list[str]:
    """Upload `paths`; returns the ids that were created."""
    created: list[str] = []

    for path in paths:
        try:
            image = client.upload_file(title_from_path(path), path)
        except requests.HTTPError as exc:
            logger.error(
                "Failed to seed image",
                extra={
                    "image": path.name,
                    "status": getattr(exc.response, "status_code", None),
                    "response": getattr(exc.response, "text", None),
                },
            )
            continue

        created.append(image["id"])
        logger.info("Seeded image", extra={"image": path.name, "image_id": image["id"]})

    return created


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    client = GalleryApiClient(args.base_url, token=args.token)
    paths = find_images(args.images_dir, args.limit)

    try:
        created = seed_images(client, paths)
        total = len(client.list_images())
    except requests.RequestException:
        logger.exception("Seeding failed", extra={"base_url": client.base_url})
        return 1

    logger.info("Seeding completed", extra={"uploaded": len(created), "gallery_size": total})
    return 0 if len(created) == len(paths) else 1


if __name__ == "__main__":
    sys.exit(main())
