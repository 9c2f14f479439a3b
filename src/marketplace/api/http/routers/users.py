from fastapi import APIRouter, Depends

from src.marketplace.api.http.deps import get_current_user
from src.marketplace.entities.core.user import PublicUser, User, sanitize_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=PublicUser)
def get_me(user: User = Depends(get_current_user)) -> PublicUser:
    return sanitize_user(user)
