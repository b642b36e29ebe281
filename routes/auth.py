from fastapi import APIRouter

from dependencies import CurrentUser, Users
from errors import NotFoundError
from models.user import User

router = APIRouter()


@router.get("")
def get_authenticated_user(current_user: CurrentUser, users: Users) -> User:
    """Return the caller's user record, without the password hash"""
    user = users.find_by_id(current_user.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
