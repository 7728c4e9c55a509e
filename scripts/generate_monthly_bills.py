#!/usr/bin/env python3
"""
Scheduled monthly bill generation, for a crontab on the API host.

Usage:
  python scripts/generate_monthly_bills.py           # respects the auto-generation flag
  python scripts/generate_monthly_bills.py --force   # generate even if the flag is off

Example crontab (00:00 on the 1st, Asia/Karachi):
  CRON_TZ=Asia/Karachi
  0 0 1 * * cd /srv/billing && python scripts/generate_monthly_bills.py

Safe to re-run within a month: customers already billed are skipped.
"""
import asyncio
import os
import sys

# Load .env from project root
try:
    from dotenv import load_dotenv
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    load_dotenv(os.path.join(_root, ".env"))
except ImportError:
    pass

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging import get_logger, setup_logging
from app.database import close_db, session_scope
from app.services.billing_service import BillingService

logger = get_logger("scripts.generate_monthly_bills")


async def run(force: bool) -> int:
    try:
        async with session_scope() as db:
            if force:
                result = await BillingService.generate_for_month(db)
            else:
                result = await BillingService.run_scheduled_generation(db)
    finally:
        await close_db()
    print(result.skipped_reason or f"Generated {result.generated} bills for {result.billing_month}")
    return result.generated


def main():
    setup_logging()
    force = "--force" in sys.argv[1:]
    try:
        asyncio.run(run(force))
    except Exception:
        logger.error("Error generating monthly bills", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
