from typing import Optional

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Identity decoded from a verified Firebase ID token"""
    user_id: str
    email: Optional[str] = None


class User(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_document(cls, user_id: str, data: dict) -> "User":
        # only whitelisted fields are read, so a stored password hash is never loaded
        return cls(
            id=user_id,
            name=data.get("name", ""),
            email=data.get("email"),
            avatar=data.get("avatar"),
        )
