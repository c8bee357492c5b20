#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from tenantkit.bulk import BulkOperations, WorkOSClient, load_settings


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Delete ALL users, organizations or memberships")
    p.add_argument("kind", choices=["users", "orgs", "memberships"])
    p.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")
    p.add_argument("--env-file", default=".env")
    return p.parse_args()


async def confirm(message: str) -> bool:
    answer = await asyncio.to_thread(input, f"{message} (y/n): ")
    return answer.strip().lower() in ("y", "yes")


async def main() -> int:
    args = parse_args()
    settings = load_settings(args.env_file)

    async with WorkOSClient.from_settings(settings) as client:
        bulk = BulkOperations(client, settings, confirm=confirm)
        if args.kind == "users":
            report = await bulk.delete_all_users(assume_yes=args.yes)
        elif args.kind == "orgs":
            report = await bulk.delete_all_organizations(assume_yes=args.yes)
        else:
            report = await bulk.delete_all_memberships(assume_yes=args.yes)
        return report.exit_code


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(asyncio.run(main()))
