import logging
from contextlib import contextmanager
from typing import Callable, List, Optional, TypeVar

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from errors import NotFoundError, PersistenceError
from models.post import Post
from models.profile import Profile
from models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_DOCUMENT_ID_BYTES = 1500


def is_valid_document_id(document_id: str) -> bool:
    """Check a path parameter against Firestore's document id rules"""
    if not document_id or "/" in document_id:
        return False
    if document_id in (".", ".."):
        return False
    if document_id.startswith("__") and document_id.endswith("__"):
        return False
    return len(document_id.encode("utf-8")) <= MAX_DOCUMENT_ID_BYTES


@contextmanager
def store_errors(action: str):
    """Log Firestore failures and surface them as an opaque PersistenceError"""
    try:
        yield
    except GoogleAPICallError as e:
        logger.exception("Firestore error while trying to %s", action)
        raise PersistenceError() from e


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)


class FirestorePostRepository:
    """Posts stored in the `posts` collection with likes and comments embedded as arrays"""

    def __init__(self, db: FirestoreDB):
        self.db = db

    def _posts(self):
        return self.db.collection("posts")

    @staticmethod
    def _to_post(snapshot) -> Post:
        post_data = snapshot.to_dict()
        post_data["id"] = snapshot.id
        return Post.model_validate(post_data)

    def find_by_id(self, post_id: str) -> Optional[Post]:
        if not is_valid_document_id(post_id):
            return None
        with store_errors(f"get post {post_id}"):
            snapshot = self._posts().document(post_id).get()
        if not snapshot.exists:
            return None
        return self._to_post(snapshot)

    def find_all(self) -> List[Post]:
        """Get all posts sorted by date descending"""
        with store_errors("list posts"):
            posts_ref = self._posts().order_by("date", direction=firestore.Query.DESCENDING).stream()
            return [self._to_post(doc) for doc in posts_ref]

    def save(self, post: Post) -> Post:
        with store_errors("save post"):
            if post.id is None:
                post_ref = self._posts().document()
            else:
                post_ref = self._posts().document(post.id)
            post_ref.set(post.to_document())
        return post.model_copy(update={"id": post_ref.id})

    def delete(self, post_id: str) -> None:
        with store_errors(f"delete post {post_id}"):
            self._posts().document(post_id).delete()

    def update(self, post_id: str, mutate: Callable[[Post], T]) -> T:
        if not is_valid_document_id(post_id):
            raise NotFoundError("Post not found")

        post_ref = self._posts().document(post_id)
        transaction = self.db.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise NotFoundError("Post not found")

            post = self._to_post(snapshot)
            result = mutate(post)

            # Written within the transaction so concurrent likes/comments are not lost
            transaction.set(post_ref, post.to_document())
            return result

        with store_errors(f"update post {post_id}"):
            return update_in_transaction(transaction, post_ref)


class FirestoreUserRepository:
    def __init__(self, db: FirestoreDB):
        self.db = db

    def find_by_id(self, user_id: str) -> Optional[User]:
        if not is_valid_document_id(user_id):
            return None
        with store_errors(f"get user {user_id}"):
            snapshot = self.db.collection("users").document(user_id).get()
        if not snapshot.exists:
            return None
        return User.from_document(snapshot.id, snapshot.to_dict())


class FirestoreProfileRepository:
    def __init__(self, db: FirestoreDB):
        self.db = db

    def find_by_user(self, user_id: str) -> Optional[Profile]:
        with store_errors(f"get profile of {user_id}"):
            profiles_ref = self.db.collection("profiles").where(
                filter=FieldFilter("user", "==", user_id)
            ).limit(1).stream()
            for doc in profiles_ref:
                profile_data = doc.to_dict()
                profile_data["id"] = doc.id
                return Profile.model_validate(profile_data)
        return None
