#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from tenantkit.bulk import BulkOperations, WorkOSClient, load_settings


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List organizations or users")
    p.add_argument("kind", choices=["orgs", "users"])
    p.add_argument("organization_id", nargs="?", help="Only list members of this organization")
    p.add_argument("--env-file", default=".env")
    return p.parse_args()


async def main() -> int:
    args = parse_args()
    settings = load_settings(args.env_file)

    async with WorkOSClient.from_settings(settings) as client:
        bulk = BulkOperations(client, settings)
        if args.kind == "orgs":
            report = await bulk.list_organizations()
        else:
            report = await bulk.list_users(args.organization_id)
        return report.exit_code


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(asyncio.run(main()))
