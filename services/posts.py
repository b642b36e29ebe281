import html
import logging
from typing import List

import bleach

from errors import AuthorizationError, BadRequestError, NotFoundError, ValidationError
from models.post import Comment, Like, Post
from models.user import User
from services.repository import PostRepository, UserRepository

logger = logging.getLogger(__name__)


def clean_text(text: str) -> str:
    """Strip tags from user supplied text, rejecting input that ends up empty"""
    # bleach escapes &, < and >; responses are JSON so the text is stored unescaped
    sanitized = html.unescape(bleach.clean(text or "", strip=True)).strip()
    if not sanitized:
        raise ValidationError("Text is required", param="text")
    return sanitized


class PostService:
    """Post, like and comment operations; every mutation touches a single post document"""

    def __init__(self, posts: PostRepository, users: UserRepository):
        self.posts = posts
        self.users = users

    def _get_user(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def create_post(self, user_id: str, text: str) -> Post:
        text = clean_text(text)
        user = self._get_user(user_id)

        post = self.posts.save(Post(
            user=user_id,
            text=text,
            name=user.name,
            avatar=user.avatar,
        ))
        logger.info("User %s created post %s", user_id, post.id)
        return post

    def list_posts(self) -> List[Post]:
        return self.posts.find_all()

    def get_post(self, post_id: str) -> Post:
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def delete_post(self, post_id: str, user_id: str) -> dict:
        post = self.get_post(post_id)

        if post.user != user_id:
            raise AuthorizationError("User not authorized")

        self.posts.delete(post_id)
        logger.info("User %s removed post %s", user_id, post_id)
        return {"message": "Post removed successfully"}

    def like_post(self, post_id: str, user_id: str) -> List[Like]:
        def like(post: Post) -> List[Like]:
            if post.is_liked_by(user_id):
                raise BadRequestError("Post already liked.")
            post.likes.insert(0, Like(user=user_id))
            return post.likes

        return self.posts.update(post_id, like)

    def unlike_post(self, post_id: str, user_id: str) -> List[Like]:
        def unlike(post: Post) -> List[Like]:
            if not post.is_liked_by(user_id):
                raise BadRequestError("Post has not yet been liked.")
            remove_index = [like.user for like in post.likes].index(user_id)
            del post.likes[remove_index]
            return post.likes

        return self.posts.update(post_id, unlike)

    def add_comment(self, post_id: str, user_id: str, text: str) -> List[Comment]:
        text = clean_text(text)
        user = self._get_user(user_id)

        def comment(post: Post) -> List[Comment]:
            post.comments.insert(0, Comment(
                user=user_id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            ))
            return post.comments

        return self.posts.update(post_id, comment)

    def delete_comment(self, post_id: str, comment_id: str, user_id: str) -> List[Comment]:
        def uncomment(post: Post) -> List[Comment]:
            comment = next((c for c in post.comments if c.id == comment_id), None)
            if comment is None:
                raise NotFoundError("Comment does not exist")

            if comment.user != user_id:
                raise AuthorizationError("User not authorized")

            # Remove by id: the caller may have authored several comments on this post
            post.comments = [c for c in post.comments if c.id != comment_id]
            return post.comments

        return self.posts.update(post_id, uncomment)
