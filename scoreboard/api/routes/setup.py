# scoreboard/api/routes/setup.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scoreboard.database import get_db
from scoreboard.schema.account import SetupResult
from scoreboard.schema.base import BaseResponse
from scoreboard.services.setup import create_admin_accounts

router = APIRouter(prefix="/setup", tags=["setup"])


@router.post("/", response_model=BaseResponse[List[SetupResult]])
async def setup_admin_accounts(db: Session = Depends(get_db)):
    """
    Create the pre-configured admin accounts. Runs sequentially and may take
    a while; accounts that already exist are reported as failures.
    """
    results = await create_admin_accounts(db)
    created = sum(1 for result in results if result.success)
    return BaseResponse(
        data=results,
        message=f"Created {created} of {len(results)} accounts",
    )
