from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from .preferences import (
    MAX_ASSETS,
    MAX_CONTENT_TYPES,
    VALID_CONTENT_TYPES,
    VALID_INVESTOR_TYPES,
)

DASHBOARD_SECTIONS = ("coinPrices", "marketNews", "aiInsight", "meme")
FEEDBACK_TYPES = ("up", "down")
MAX_COMMENT_LENGTH = 500
ACCOUNT_TYPES = ("basic", "pro")


class SignupIn(BaseModel):
    email: str
    password: str = Field(min_length=6)
    firstName: str = Field(min_length=1)
    lastName: str = Field(min_length=1)
    profileImg: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must be a valid email address")
        return v


class LoginIn(BaseModel):
    email: str
    password: str


class UserUpdateIn(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    profileImg: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6)


class AdminUserUpdateIn(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    profileImg: Optional[str] = None
    score: Optional[int] = Field(default=None, ge=0)
    account: Optional[str] = None

    @field_validator("account")
    @classmethod
    def _account(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in ACCOUNT_TYPES:
            raise ValueError(f"account must be one of: {', '.join(ACCOUNT_TYPES)}")
        return v


class PreferencesIn(BaseModel):
    interestedAssets: List[str]
    investorType: str
    contentTypes: List[str]

    @field_validator("interestedAssets")
    @classmethod
    def _assets(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("interestedAssets must contain at least 1 item")
        if len(v) > MAX_ASSETS:
            raise ValueError(f"interestedAssets must contain at most {MAX_ASSETS} items")
        if any(not str(a).strip() for a in v):
            raise ValueError("interestedAssets must not contain blank symbols")
        return v

    @field_validator("investorType")
    @classmethod
    def _investor_type(cls, v: str) -> str:
        if v not in VALID_INVESTOR_TYPES:
            raise ValueError(f"investorType must be one of: {', '.join(VALID_INVESTOR_TYPES)}")
        return v

    @field_validator("contentTypes")
    @classmethod
    def _content_types(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("contentTypes must contain at least 1 item")
        if len(v) > MAX_CONTENT_TYPES:
            raise ValueError(f"contentTypes must contain at most {MAX_CONTENT_TYPES} items")
        invalid = [t for t in v if t not in VALID_CONTENT_TYPES]
        if invalid:
            raise ValueError(
                f"Invalid contentTypes: {', '.join(invalid)}. Valid options: {', '.join(VALID_CONTENT_TYPES)}"
            )
        return v


class FeedbackIn(BaseModel):
    type: str         # up | down
    section: str      # coinPrices | marketNews | aiInsight | meme
    contentId: Optional[str] = None
    comment: Optional[str] = None

    @field_validator("type")
    @classmethod
    def _type(cls, v: str) -> str:
        if v not in FEEDBACK_TYPES:
            raise ValueError(f"type must be one of: {', '.join(FEEDBACK_TYPES)}")
        return v

    @field_validator("section")
    @classmethod
    def _section(cls, v: str) -> str:
        if v not in DASHBOARD_SECTIONS:
            raise ValueError(f"section must be one of: {', '.join(DASHBOARD_SECTIONS)}")
        return v

    @field_validator("comment")
    @classmethod
    def _comment(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > MAX_COMMENT_LENGTH:
            raise ValueError(f"comment must be at most {MAX_COMMENT_LENGTH} characters")
        return v
