"""
In-memory repositories for local development and tests.
"""

import threading
import uuid
from typing import Callable, Dict, List, Optional, TypeVar

from errors import NotFoundError
from models.post import Post
from models.profile import Profile
from models.user import User

T = TypeVar("T")


class InMemoryPostRepository:
    def __init__(self):
        self.posts: Dict[str, Post] = {}
        # serializes update() the way a Firestore transaction would
        self._lock = threading.Lock()

    def find_by_id(self, post_id: str) -> Optional[Post]:
        post = self.posts.get(post_id)
        return post.model_copy(deep=True) if post else None

    def find_all(self) -> List[Post]:
        posts = sorted(self.posts.values(), key=lambda post: post.date, reverse=True)
        return [post.model_copy(deep=True) for post in posts]

    def save(self, post: Post) -> Post:
        post_id = post.id or uuid.uuid4().hex
        stored = post.model_copy(update={"id": post_id}, deep=True)
        self.posts[post_id] = stored
        return stored.model_copy(deep=True)

    def delete(self, post_id: str) -> None:
        self.posts.pop(post_id, None)

    def update(self, post_id: str, mutate: Callable[[Post], T]) -> T:
        with self._lock:
            stored = self.posts.get(post_id)
            if stored is None:
                raise NotFoundError("Post not found")
            post = stored.model_copy(deep=True)
            result = mutate(post)
            self.posts[post_id] = post
            return result

    def reset(self):
        self.posts.clear()


class InMemoryUserRepository:
    def __init__(self):
        self.users: Dict[str, User] = {}

    def add(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)


class InMemoryProfileRepository:
    def __init__(self):
        self.profiles: Dict[str, Profile] = {}

    def add(self, profile: Profile) -> Profile:
        self.profiles[profile.user] = profile
        return profile

    def find_by_user(self, user_id: str) -> Optional[Profile]:
        return self.profiles.get(user_id)
