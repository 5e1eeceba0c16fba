# scoreboard/services/roles.py
from typing import Optional

from scoreboard.schema.account import Permissions, Role


def permissions_for(role: Optional[str]) -> Permissions:
    """
    Derive permission flags from a profile role.

    Admins and editors can create and edit; only admins can delete or manage
    users. Without a role every flag is off.
    """
    role = Role(role) if role else None

    is_admin = role == Role.ADMIN
    is_editor = role == Role.EDITOR
    is_viewer = role == Role.VIEWER

    return Permissions(
        role=role,
        is_admin=is_admin,
        is_editor=is_editor,
        is_viewer=is_viewer,
        can_create=is_admin or is_editor,
        can_edit=is_admin or is_editor,
        can_delete=is_admin,
        can_manage_users=is_admin,
    )
