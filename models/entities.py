"""
Core data shapes of the SocialX platform (users, posts, comments)

Attributes are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from shared.constants import Validation
from shared.utils import format_date

WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, from_attributes=True
)


class User(BaseModel):
    """Public user record"""
    id: str = Field(..., min_length=1, description="Unique user identifier")
    email: str = Field(..., description="User email address")
    username: str = Field(
        ...,
        min_length=Validation.USERNAME_MIN_LENGTH,
        max_length=Validation.USERNAME_MAX_LENGTH,
        description="Username",
    )
    display_name: str = Field(..., min_length=1, max_length=100, description="Display name")
    avatar: Optional[str] = Field(None, description="Avatar image URL")
    bio: Optional[str] = Field(None, max_length=500, description="User biography")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Basic email validation"""
        if '@' not in v:
            raise ValueError('Invalid email format')
        return v

    @field_serializer('created_at', 'updated_at')
    def serialize_datetime(self, value: datetime) -> str:
        return format_date(value)

    model_config = WIRE_CONFIG


class Comment(BaseModel):
    """Comment attached to a post"""
    id: str = Field(..., min_length=1, description="Unique comment identifier")
    post_id: str = Field(..., min_length=1, description="Associated post identifier")
    author_id: str = Field(..., min_length=1, description="Comment author identifier")
    content: str = Field(
        ..., min_length=1, max_length=Validation.COMMENT_MAX_LENGTH, description="Comment content"
    )
    created_at: datetime = Field(..., description="Comment creation timestamp")

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError('Comment content cannot be empty')
        return v.strip()

    @field_serializer('created_at')
    def serialize_datetime(self, value: datetime) -> str:
        return format_date(value)

    model_config = WIRE_CONFIG


class Post(BaseModel):
    """Post with its like count and comments"""
    id: str = Field(..., min_length=1, description="Unique post identifier")
    author_id: str = Field(..., min_length=1, description="Post author identifier")
    content: str = Field(
        ..., min_length=1, max_length=Validation.POST_MAX_LENGTH, description="Post content"
    )
    media_urls: Optional[List[str]] = Field(None, description="Attached media URLs")
    likes: int = Field(default=0, ge=0, description="Number of likes")
    comments: List[Comment] = Field(default_factory=list, description="Comments on the post")
    created_at: datetime = Field(..., description="Post creation timestamp")
    updated_at: datetime = Field(..., description="Post last update timestamp")

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError('Post content cannot be empty')
        return v.strip()

    @field_serializer('created_at', 'updated_at')
    def serialize_datetime(self, value: datetime) -> str:
        return format_date(value)

    model_config = WIRE_CONFIG
