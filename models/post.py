import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class Post(BaseModel):
    id: Optional[str] = None
    user: str
    text: str
    # name and avatar are snapshots of the author taken when the post is created
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)
    likes: List[Like] = []
    comments: List[Comment] = []

    def is_liked_by(self, user_id: str) -> bool:
        return any(like.user == user_id for like in self.likes)

    def to_document(self) -> dict:
        """Firestore representation; the id lives on the document reference"""
        return self.model_dump(exclude={"id"})


class TextRequest(BaseModel):
    """Body of the create-post and add-comment routes"""
    text: str = Field(default="", validate_default=True)

    @field_validator("text", mode="before")
    @classmethod
    def text_required(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("text_required", "Text is required")
        return value
