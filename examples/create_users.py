#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from tenantkit.bulk import BulkOperations, WorkOSClient, load_settings


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Create users from EMAIL_TEMPLATE and add them to an organization"
    )
    p.add_argument("count", type=int)
    p.add_argument("organization_id")
    p.add_argument("--env-file", default=".env")
    return p.parse_args()


async def main() -> int:
    args = parse_args()
    settings = load_settings(args.env_file)
    print(f"API Key        : {settings.masked_api_key}")
    print(f"Email Template : {settings.email_template}")

    async with WorkOSClient.from_settings(settings) as client:
        bulk = BulkOperations(client, settings)
        report = await bulk.create_users(args.count, args.organization_id)
        return report.exit_code


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(asyncio.run(main()))
