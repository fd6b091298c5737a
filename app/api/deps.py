from dataclasses import dataclass
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import ApiError
from app.core.security import decode_access_token
from app.db.session import get_db
from app.services.skip_policy import SkipPolicy, get_skip_policy
from app.services.video_catalog import SqlVideoCatalog, VideoCatalog

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthenticatedUser:
    if credentials is None:
        raise ApiError(status_code=401, code=ErrorCode.UNAUTHORIZED, message="Missing authorization token")

    token = credentials.credentials
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise ApiError(status_code=401, code=ErrorCode.INVALID_TOKEN, message="Invalid or expired token") from exc

    user_id = payload.get("sub")
    if payload.get("type") != "access" or not user_id:
        raise ApiError(status_code=401, code=ErrorCode.INVALID_TOKEN, message="Invalid token")
    return AuthenticatedUser(id=str(user_id), role=str(payload.get("role") or "user"))


def get_video_catalog(db: Session = Depends(get_db)) -> VideoCatalog:
    return SqlVideoCatalog(db)


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
Catalog = Annotated[VideoCatalog, Depends(get_video_catalog)]
SkipPolicyDep = Annotated[SkipPolicy, Depends(get_skip_policy)]
