from typing import Optional, List
from sqlmodel import SQLModel, Field, Column, JSON
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    first_name: str
    last_name: str
    profile_img: str = ""
    account: str = "basic"  # basic | pro
    score: int = 0
    is_admin: bool = False
    role: str = "user"  # user | admin
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class UserPreferences(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True, unique=True)
    interested_assets: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    investor_type: Optional[str] = None
    content_types: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    completed_onboarding: bool = False
    updated_at: Optional[datetime] = None


class Feedback(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    type: str  # up | down
    section: str  # coinPrices | marketNews | aiInsight | meme
    content_id: Optional[str] = None
    comment: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, index=True)
