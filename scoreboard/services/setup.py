# scoreboard/services/setup.py
import asyncio
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoreboard.logging_config import app_logger
from scoreboard.schema.account import Role, SetupResult
from scoreboard.services.auth import create_identity, create_profile
from scoreboard.settings import settings


def setup_accounts() -> List[dict]:
    return [
        {
            "email": f"admin{i}@example.com",
            "password": settings.SETUP_PASSWORD,
            "name": f"Admin {i}",
        }
        for i in range(1, settings.SETUP_ACCOUNT_COUNT + 1)
    ]


async def create_admin_accounts(db: Session) -> List[SetupResult]:
    """
    Create the pre-configured admin accounts one after another.

    Each account is an identity insert followed by a profile insert and a
    fixed pause. A run that stops part-way leaves the accounts created so far
    in place, and a re-run reports those as failures.
    """
    results: List[SetupResult] = []

    for account_data in setup_accounts():
        email = account_data["email"]
        try:
            account = create_identity(email, account_data["password"], db)
            create_profile(account, account_data["name"], Role.ADMIN, db)
            results.append(SetupResult(email=email, success=True))
        except HTTPException as e:
            results.append(SetupResult(email=email, success=False, error=e.detail))
        except SQLAlchemyError as e:
            db.rollback()
            results.append(SetupResult(email=email, success=False, error=str(e)))

        await asyncio.sleep(settings.SETUP_DELAY_SECONDS)

    created = sum(1 for result in results if result.success)
    app_logger.info(f"Account setup finished: {created}/{len(results)} created")
    return results
