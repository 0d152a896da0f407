from fastapi import APIRouter, Depends, HTTPException, status

from ..logging_setup import get_logger
from ..schema import AdminUserUpdateIn
from ..security import get_current_user_id
from ..store import get_session
from ..users import (
    ADMIN_UPDATABLE_FIELDS,
    delete_user,
    get_user,
    is_admin,
    list_users,
    public_user,
    update_user,
)

logger = get_logger("crypto_dashboard.routes.users")

# The int convertor keeps /me and /preferences out of these routes
router = APIRouter(prefix="/api/user", tags=["User admin"])


def require_admin(user_id: int = Depends(get_current_user_id)) -> int:
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None or not is_admin(user):
            logger.warning("Admin route refused", extra={"user_id": user_id})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user_id


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("")
def get_users(_: int = Depends(require_admin)):
    with get_session() as s:
        users = [public_user(u) for u in list_users(s)]
    return {"users": users, "count": len(users)}


@router.get("/{user_id:int}")
def get_one_user(user_id: int, _: int = Depends(require_admin)):
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None:
            raise _not_found()
        return public_user(user)


@router.put("/{user_id:int}")
def admin_update_user(user_id: int, body: AdminUserUpdateIn, admin_id: int = Depends(require_admin)):
    logger.info(f"Admin {admin_id} updating user {user_id}")
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None:
            raise _not_found()
        user = update_user(
            s,
            user,
            {
                "first_name": body.firstName,
                "last_name": body.lastName,
                "profile_img": body.profileImg,
                "score": body.score,
                "account": body.account,
            },
            allowed=ADMIN_UPDATABLE_FIELDS,
        )
        return public_user(user)


@router.delete("/{user_id:int}")
def remove_user(user_id: int, admin_id: int = Depends(require_admin)):
    if user_id == admin_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None:
            raise _not_found()
        delete_user(s, user)
    return {"message": "User deleted successfully"}
