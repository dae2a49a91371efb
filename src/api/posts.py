"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_post_service
from src.config import get_settings
from src.models.user import User
from src.schemas.post import (
    MessageResponse,
    MyPostListResponse,
    PaginationResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostStatsResponse,
    PostUpdate,
)
from src.services.post_service import PostPage, PostService

settings = get_settings()

router = APIRouter(prefix="/api/posts", tags=["posts"])

PageParam = Annotated[int, Query(ge=1)]
LimitParam = Annotated[int, Query(ge=1, le=settings.max_page_size)]


def _post_list(page: PostPage, message: str) -> PostListResponse:
    return PostListResponse(
        message=message,
        posts=[PostResponse.model_validate(post) for post in page.posts],
        pagination=PaginationResponse.model_validate(page.pagination),
    )


@router.get("", response_model=PostListResponse)
async def get_posts(
    posts: Annotated[PostService, Depends(get_post_service)],
    page: PageParam = 1,
    limit: LimitParam = settings.default_page_size,
):
    """Get published posts, newest first."""
    result = posts.list_published_posts(page=page, page_size=limit)
    return _post_list(result, "Posts retrieved successfully")


@router.post("", response_model=PostDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Create a new post as the current user."""
    post = posts.create_post(
        current_user.id,
        title=post_data.title,
        content=post_data.content,
        published=post_data.published,
    )
    return PostDetailResponse(
        message="Post created successfully",
        post=PostResponse.model_validate(post),
    )


# Must be registered before /{post_id}
@router.get("/my/posts", response_model=MyPostListResponse)
async def get_my_posts(
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
    page: PageParam = 1,
    limit: LimitParam = settings.default_page_size,
    published: bool | None = None,
):
    """Get the current user's posts, drafts included."""
    result = posts.list_my_posts(current_user.id, page=page, page_size=limit, published=published)
    base = _post_list(result, "Your posts retrieved successfully")
    return MyPostListResponse(
        message=base.message,
        posts=base.posts,
        pagination=base.pagination,
        stats=PostStatsResponse.model_validate(result.stats),
    )


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: str,
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Get a single post by id."""
    post = posts.get_post(post_id)
    return PostDetailResponse(
        message="Post retrieved successfully",
        post=PostResponse.model_validate(post),
    )


@router.put("/{post_id}", response_model=PostDetailResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Update a post (author only)."""
    post = posts.update_post(
        current_user.id,
        post_id,
        title=post_data.title,
        content=post_data.content,
        published=post_data.published,
    )
    return PostDetailResponse(
        message="Post updated successfully",
        post=PostResponse.model_validate(post),
    )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Permanently delete a post (author only)."""
    posts.delete_post(current_user.id, post_id)
    return MessageResponse(message="Post deleted successfully")
