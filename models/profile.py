from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.post import utcnow


class Social(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class Profile(BaseModel):
    id: Optional[str] = None
    user: str
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: str
    skills: List[str] = []
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Social = Social()
    date: datetime = Field(default_factory=utcnow)
