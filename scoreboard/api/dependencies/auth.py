# scoreboard/api/dependencies/auth.py
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from scoreboard.database import get_db
from scoreboard.models.account import UserAccount
from scoreboard.schema.account import AdminProfile, CurrentUser
from scoreboard.services.auth import decode_access_token
from scoreboard.services.roles import permissions_for

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """
    Resolve the bearer token to the signed-in identity and its profile.
    """
    if not credentials:
        raise HTTPException(status_code=401, detail="Authorization token is missing")

    user_id = decode_access_token(credentials.credentials)
    account = db.get(UserAccount, user_id)
    if not account:
        raise HTTPException(status_code=401, detail="Token is invalid")

    profile = account.profile
    return CurrentUser(
        id=account.id,
        email=account.email,
        profile=AdminProfile.model_validate(profile) if profile else None,
        permissions=permissions_for(profile.role if profile else None),
    )


def require_permission(flag: str):
    """
    Build a dependency that lets the request through only when the
    signed-in user's role grants `flag` (e.g. "can_delete").
    """

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not getattr(user.permissions, flag):
            raise HTTPException(
                status_code=403,
                detail="You do not have permission to perform this action",
            )
        return user

    return dependency


can_create = require_permission("can_create")
can_edit = require_permission("can_edit")
can_delete = require_permission("can_delete")
can_manage_users = require_permission("can_manage_users")
