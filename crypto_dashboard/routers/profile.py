from fastapi import APIRouter, Depends, HTTPException, status

from ..logging_setup import get_logger
from ..schema import UserUpdateIn
from ..security import get_current_user_id
from ..store import get_session
from ..users import get_user, public_user, update_user

logger = get_logger("crypto_dashboard.routes.profile")

router = APIRouter(prefix="/api/user", tags=["User"])


@router.put("/me")
def update_me(body: UserUpdateIn, user_id: int = Depends(get_current_user_id)):
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        user = update_user(
            s,
            user,
            {
                "first_name": body.firstName,
                "last_name": body.lastName,
                "profile_img": body.profileImg,
                "password": body.password,
            },
        )
        return public_user(user)
