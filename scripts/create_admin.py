#!/usr/bin/env python3
"""
Create (or promote) the first administrator account.

Usage:
  ADMIN_EMAIL=owner@example.com ADMIN_PASSWORD='...' python scripts/create_admin.py
  # Both may also be set in .env

The credential is never stored in code; the role lives on the account record.
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

from app.config import settings
from app.core.logging import get_logger, setup_logging
from app.database import close_db, session_scope
from app.models.enums import UserRole
from app.services.user_service import UserService

logger = get_logger("scripts.create_admin")


async def create_admin(email: str, password: str) -> str:
    async with session_scope() as db:
        user = await UserService.get_user_by_email(db, email)
        if user:
            if user.role != UserRole.ADMIN or not user.is_active:
                user.role = UserRole.ADMIN
                user.is_active = True
                await db.commit()
                return f"Promoted existing account {user.email} to admin (uid {user.uid})"
            return f"Admin {user.email} already exists (uid {user.uid})"
        user = await UserService.create_user(db, email=email, password=password, role=UserRole.ADMIN)
        return f"Admin {user.email} created (uid {user.uid})"


def main():
    setup_logging()
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        print("ERROR: ADMIN_EMAIL and ADMIN_PASSWORD must be set. Add to .env or export.")
        sys.exit(1)

    async def run():
        try:
            return await create_admin(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        finally:
            await close_db()

    message = asyncio.run(run())
    logger.info(message)
    print(message)


if __name__ == "__main__":
    main()
