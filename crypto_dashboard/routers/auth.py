from fastapi import APIRouter, Depends, HTTPException, status

from ..logging_setup import get_logger
from ..schema import LoginIn, SignupIn
from ..security import create_access_token, get_current_user_id
from ..store import get_session
from ..users import EmailAlreadyRegistered, authenticate, create_user, get_user, public_user

logger = get_logger("crypto_dashboard.routes.auth")

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _token_response(user) -> dict:
    return {"token": create_access_token(user.id, user.email), "user": public_user(user)}


@router.post("/signup")
def signup(body: SignupIn):
    logger.info("Signup requested")
    with get_session() as s:
        try:
            user = create_user(
                s,
                email=body.email,
                password=body.password,
                first_name=body.firstName,
                last_name=body.lastName,
                profile_img=body.profileImg or "",
            )
        except EmailAlreadyRegistered:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User with this email already exists")
        return _token_response(user)


@router.post("/login")
def login(body: LoginIn):
    with get_session() as s:
        user = authenticate(s, body.email, body.password)
        if user is None:
            logger.info("Login rejected")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
        logger.info(f"Login ok: user={user.id}")
        return _token_response(user)


@router.post("/logout")
def logout():
    # Tokens are stateless; the client drops its copy
    return {"message": "Logged out successfully"}


@router.get("/me")
def me(user_id: int = Depends(get_current_user_id)):
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return public_user(user)
