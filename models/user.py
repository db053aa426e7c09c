from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Caller identity resolved from a verified ID token"""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class UserProfile(BaseModel):
    id: str
    email: Optional[str] = None
    name: str
    avatar: Optional[str] = None
