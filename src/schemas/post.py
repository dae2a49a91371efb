"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictBool
from pydantic.alias_generators import to_camel

CAMEL_CASE = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PostCreate(BaseModel):
    """Create a post. Length rules are enforced by the post service."""

    title: str | None = None
    content: str | None = None
    published: StrictBool | None = None


class PostUpdate(BaseModel):
    """Partially update a post."""

    title: str | None = None
    content: str | None = None
    published: StrictBool | None = None


class AuthorResponse(BaseModel):
    """Author view embedded in posts."""

    model_config = CAMEL_CASE

    id: str
    username: str
    email: str
    created_at: datetime


class PostResponse(BaseModel):
    """Post response."""

    model_config = CAMEL_CASE

    id: str
    title: str
    content: str
    published: bool
    created_at: datetime
    updated_at: datetime
    author_id: str
    author: AuthorResponse


class PaginationResponse(BaseModel):
    """Pagination metadata."""

    model_config = CAMEL_CASE

    current_page: int
    total_pages: int
    total_posts: int
    posts_per_page: int
    has_next_page: bool
    has_previous_page: bool


class PostStatsResponse(BaseModel):
    """Counts over all of the current user's posts."""

    model_config = CAMEL_CASE

    total_posts: int
    published_posts: int
    draft_posts: int


class PostDetailResponse(BaseModel):
    """Single post wrapped with a message."""

    message: str
    post: PostResponse


class PostListResponse(BaseModel):
    """A page of posts."""

    model_config = CAMEL_CASE

    message: str
    posts: list[PostResponse]
    pagination: PaginationResponse


class MyPostListResponse(PostListResponse):
    """A page of the current user's posts with stats."""

    stats: PostStatsResponse


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
