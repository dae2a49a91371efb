"""Post service for blog post CRUD and visibility rules."""

import logging
import math
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from src.models.mixins import utcnow
from src.models.post import CONTENT_MIN_LENGTH, TITLE_MAX_LENGTH, TITLE_MIN_LENGTH, Post
from src.services.exceptions import (
    AuthorizationError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class Pagination:
    """Pagination metadata for a page of posts."""

    current_page: int
    total_pages: int
    total_posts: int
    posts_per_page: int
    has_next_page: bool
    has_previous_page: bool


@dataclass
class PostStats:
    """Post counts over all of an author's posts."""

    total_posts: int = 0
    published_posts: int = 0
    draft_posts: int = 0


@dataclass
class PostPage:
    """One page of posts plus pagination metadata."""

    posts: list[Post]
    pagination: Pagination
    stats: PostStats | None = field(default=None)


def paginate(total: int, page: int, page_size: int) -> Pagination:
    """Compute pagination metadata against the true total.

    Pages past the end are not an error; they simply have no posts.
    """
    total_pages = math.ceil(total / page_size)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_posts=total,
        posts_per_page=page_size,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def is_post_owner(post: Post, requester_id: str) -> bool:
    """Whether the requester is the author of the post."""
    return post.author_id == requester_id


def _clean_title(title) -> str:
    if not isinstance(title, str):
        raise ValidationError("Title must be a string", field="title")
    title = title.strip()
    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(
            f"Title must be at least {TITLE_MIN_LENGTH} characters", field="title"
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return title


def _clean_content(content) -> str:
    if not isinstance(content, str):
        raise ValidationError("Content must be a string", field="content")
    content = content.strip()
    if len(content) < CONTENT_MIN_LENGTH:
        raise ValidationError(
            f"Content must be at least {CONTENT_MIN_LENGTH} characters", field="content"
        )
    return content


def _check_published(published) -> bool:
    if not isinstance(published, bool):
        raise ValidationError("Published field must be boolean", field="published")
    return published


def _check_page(page: int, page_size: int) -> None:
    if page < 1:
        raise ValidationError("Page must be at least 1", field="page")
    if page_size < 1:
        raise ValidationError("Page size must be at least 1", field="limit")


class PostService:
    """Service for post-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise InternalError("Could not save changes") from e

    def _page(self, query: Query, page: int, page_size: int) -> tuple[list[Post], Pagination]:
        total = query.count()
        posts = (
            query.options(joinedload(Post.author))
            .order_by(Post.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return posts, paginate(total, page, page_size)

    def create_post(
        self,
        author_id: str,
        title: str | None,
        content: str | None,
        published: bool | None = None,
    ) -> Post:
        """Create a post owned by author_id. Drafts unless published=True."""
        if title is None or content is None:
            raise ValidationError(
                "Title and content are required",
                field="title" if title is None else "content",
            )

        post = Post(
            title=_clean_title(title),
            content=_clean_content(content),
            published=False if published is None else _check_published(published),
            author_id=author_id,
        )
        self.db.add(post)
        self._commit()
        self.db.refresh(post)

        logger.info(f"User {author_id} created post {post.id} (published={post.published})")
        return post

    def list_published_posts(self, page: int = 1, page_size: int = 10) -> PostPage:
        """Public listing of published posts, newest first."""
        _check_page(page, page_size)
        query = self.db.query(Post).filter(Post.published == True)  # noqa: E712
        posts, pagination = self._page(query, page, page_size)
        return PostPage(posts=posts, pagination=pagination)

    def get_post(self, post_id: str) -> Post:
        """Get a post by id regardless of its published state."""
        post = (
            self.db.query(Post).options(joinedload(Post.author)).filter(Post.id == post_id).first()
        )
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def update_post(
        self,
        author_id: str,
        post_id: str,
        title: str | None = None,
        content: str | None = None,
        published: bool | None = None,
    ) -> Post:
        """Partially update a post owned by author_id."""
        post = self.get_post(post_id)

        if not is_post_owner(post, author_id):
            logger.warning(f"User {author_id} denied edit of post {post_id}")
            raise AuthorizationError("You can only edit your own posts")

        if title is None and content is None and published is None:
            raise ValidationError(
                "At least one field (title, content or published) is required"
            )

        # Validate everything before touching the row
        updates = {}
        if title is not None:
            updates["title"] = _clean_title(title)
        if content is not None:
            updates["content"] = _clean_content(content)
        if published is not None:
            updates["published"] = _check_published(published)

        for key, value in updates.items():
            setattr(post, key, value)
        post.updated_at = utcnow()

        self._commit()
        self.db.refresh(post)

        logger.info(f"User {author_id} updated post {post_id}: {sorted(updates)}")
        return post

    def delete_post(self, author_id: str, post_id: str) -> None:
        """Permanently delete a post owned by author_id."""
        post = self.get_post(post_id)

        if not is_post_owner(post, author_id):
            logger.warning(f"User {author_id} denied delete of post {post_id}")
            raise AuthorizationError("You can only delete your own posts")

        self.db.delete(post)
        self._commit()

        logger.info(f"User {author_id} deleted post {post_id}")

    def get_post_stats(self, author_id: str) -> PostStats:
        """Count an author's posts by published state."""
        counts = dict(
            self.db.query(Post.published, func.count(Post.id))
            .filter(Post.author_id == author_id)
            .group_by(Post.published)
            .all()
        )
        published = counts.get(True, 0)
        drafts = counts.get(False, 0)
        return PostStats(
            total_posts=published + drafts,
            published_posts=published,
            draft_posts=drafts,
        )

    def list_my_posts(
        self,
        author_id: str,
        page: int = 1,
        page_size: int = 10,
        published: bool | None = None,
    ) -> PostPage:
        """An author's own posts, drafts included, with overall stats."""
        _check_page(page, page_size)
        query = self.db.query(Post).filter(Post.author_id == author_id)
        if published is not None:
            query = query.filter(Post.published == published)

        posts, pagination = self._page(query, page, page_size)
        return PostPage(posts=posts, pagination=pagination, stats=self.get_post_stats(author_id))
