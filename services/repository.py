"""
Storage interfaces consumed by the post service and routes.
"""

from typing import Callable, List, Optional, Protocol, TypeVar

from models.post import Post
from models.profile import Profile
from models.user import User

T = TypeVar("T")


class PostRepository(Protocol):
    def find_by_id(self, post_id: str) -> Optional[Post]:
        """Return the post, or None when it is missing or the id is malformed"""
        ...

    def find_all(self) -> List[Post]:
        """Return every post, newest first"""
        ...

    def save(self, post: Post) -> Post:
        """Insert or overwrite a post; assigns an id to new posts"""
        ...

    def delete(self, post_id: str) -> None:
        ...

    def update(self, post_id: str, mutate: Callable[[Post], T]) -> T:
        """
        Atomically read a post, apply `mutate` to it and write it back.

        Raises NotFoundError when the post does not exist. Any exception raised
        by `mutate` aborts the write and propagates.
        """
        ...


class UserRepository(Protocol):
    def find_by_id(self, user_id: str) -> Optional[User]:
        ...


class ProfileRepository(Protocol):
    def find_by_user(self, user_id: str) -> Optional[Profile]:
        ...
