"""
Pydantic request models for API data validation
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional

from shared.constants import Pagination, Validation

REQUEST_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationParams(BaseModel):
    """Page/limit query parameters"""
    page: int = Field(default=Pagination.DEFAULT_PAGE, ge=1, description="Page number")
    limit: int = Field(
        default=Pagination.DEFAULT_LIMIT,
        ge=1,
        le=Pagination.MAX_LIMIT,
        description="Items per page",
    )

    @property
    def offset(self) -> int:
        """Number of items before the first one on this page"""
        return (self.page - 1) * self.limit


class RegisterRequest(BaseModel):
    """Account registration request model"""
    email: str = Field(..., description="User email address")
    username: str = Field(
        ...,
        min_length=Validation.USERNAME_MIN_LENGTH,
        max_length=Validation.USERNAME_MAX_LENGTH,
        description="Username",
    )
    password: str = Field(..., min_length=Validation.PASSWORD_MIN_LENGTH, description="Password")
    display_name: str = Field(..., min_length=1, max_length=100, description="Display name")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Basic email validation"""
        v = v.strip()
        if '@' not in v:
            raise ValueError('Invalid email format')
        return v.lower()

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        """Usernames are letters, digits and underscores"""
        if not v.replace('_', '').isalnum() or not v.isascii():
            raise ValueError('Username may only contain letters, digits and underscores')
        return v

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, v):
        if not v.strip():
            raise ValueError('Display name cannot be empty')
        return v.strip()

    model_config = REQUEST_CONFIG


class LoginRequest(BaseModel):
    """Login request model"""
    email: str = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return v.strip().lower()


class PostRequest(BaseModel):
    """Post creation request model"""
    content: str = Field(..., min_length=1, max_length=Validation.POST_MAX_LENGTH, description="Post content")
    media_urls: Optional[List[str]] = Field(default=None, description="Attached media URLs")

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        """Validate post content"""
        if not v.strip():
            raise ValueError('Post content cannot be empty')
        return v.strip()

    @field_validator('media_urls')
    @classmethod
    def validate_media_urls(cls, v):
        """Drop blank and duplicate URLs"""
        if v is None:
            return None
        cleaned_urls = []
        for url in v:
            if isinstance(url, str) and url.strip():
                cleaned_url = url.strip()
                if cleaned_url not in cleaned_urls:
                    cleaned_urls.append(cleaned_url)
        return cleaned_urls

    model_config = REQUEST_CONFIG


class CommentRequest(BaseModel):
    """Comment creation request model"""
    content: str = Field(..., min_length=1, max_length=Validation.COMMENT_MAX_LENGTH, description="Comment content")

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError('Comment content cannot be empty')
        return v.strip()


class UserProfileUpdateRequest(BaseModel):
    """User profile update request model"""
    display_name: Optional[str] = Field(None, max_length=100, description="Display name")
    avatar: Optional[str] = Field(None, description="Avatar image URL")
    bio: Optional[str] = Field(None, max_length=500, description="User biography")

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, v):
        """Validate display name"""
        if v is not None and not v.strip():
            raise ValueError('Display name cannot be empty')
        return v.strip() if v else None

    @field_validator('bio')
    @classmethod
    def validate_bio(cls, v):
        """Validate bio"""
        if v is not None:
            return v.strip()
        return v

    model_config = REQUEST_CONFIG
