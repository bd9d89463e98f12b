#!/usr/bin/env python3
"""
Seed script to ingest sample images through the upload-by-URL endpoint.

Run:
    python seed/seed_urls.py \
      --upload-url https://<api>/upload_url \
      --list-url https://<api>/list \
      --password <BASIC_PASS>
"""

import argparse
import json
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed images via the Image Gateway API")

    parser.add_argument(
        "--upload-url",
        required=True,
        help="Full URL of the upload-by-URL endpoint",
    )
    parser.add_argument(
        "--list-url",
        default=None,
        help="Full URL of the list endpoint; the listing is logged when given",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Shared secret (BASIC_PASS), sent as a Bearer token",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=3,
        help="Number of URLs to seed",
    )

    return parser.parse_args()


def load_sample_data() -> dict[str, Any]:
    data_file = Path(__file__).parent / "data" / "urls.json"
    with open(data_file, encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


def seed_urls() -> None:
    try:
        args = parse_args()
        data = load_sample_data()

        headers: dict[str, str] = {"Content-Type": "application/json"}
        if args.password:
            headers["Authorization"] = f"Bearer {args.password}"

        items = cast(list[dict[str, Any]], data.get("list", []))[: args.limit]

        logger.info(
            "Starting seeding process",
            extra={"upload_url": args.upload_url, "count": len(items)},
        )

        response = requests.post(
            args.upload_url,
            headers=headers,
            json={"list": items},
            timeout=120,
        )
        response_json = cast(dict[str, Any], response.json())

        if response.status_code != 200:
            logger.error(
                "Seeding request rejected",
                extra={"status": response.status_code, "response": response_json},
            )
            sys.exit(1)

        for result in cast(list[dict[str, Any]], response_json.get("results", [])):
            if result.get("success"):
                logger.info(
                    "Seeded image",
                    extra={"url": result.get("url"), "src": result.get("src")},
                )
            else:
                logger.error(
                    "Failed to seed image",
                    extra={"url": result.get("url"), "error": result.get("error")},
                )

        logger.info("Seeding completed")

        if args.list_url:
            list_response = requests.get(
                args.list_url,
                params={"pwd": args.password} if args.password else None,
                timeout=60,
            )
            logger.info(
                "List files response",
                extra={
                    "status": list_response.status_code,
                    "total": list_response.json().get("total")
                    if list_response.ok
                    else list_response.text,
                },
            )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_urls()
