# /edura/core/deps.py

"""
Request identity for the API layer.

Authentication happens upstream; the session layer forwards the already
trusted caller as the `X-User-Id` and `X-User-Role` headers. The core only
authorizes against that identity.
"""

from enum import Enum
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from pydantic import BaseModel


class Role(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"
    MANAGER = "manager"


class Identity(BaseModel):
    user_id: str
    role: Role


def get_current_identity(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Identity:
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        role = Role(x_user_role.lower())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown role")
    return Identity(user_id=x_user_id, role=role)


def require_role(*roles: Role):
    """Dependency factory that admits only callers holding one of `roles`."""
    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in roles:
            allowed = ", ".join(r.value for r in roles)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Access denied: {allowed} only")
        return identity
    return dependency
