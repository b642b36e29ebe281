import logging
from typing import Annotated

from fastapi import Request, Depends
from firebase_admin.auth import verify_id_token
from firebase_admin.exceptions import FirebaseError

from errors import UnauthenticatedError
from models.user import AuthenticatedUser
from services.posts import PostService
from services.repository import PostRepository, UserRepository, ProfileRepository

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> AuthenticatedUser:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthenticatedError("No token, authorization denied")

    token = authorization.split("Bearer ")[1]
    try:
        # Verify the Firebase ID token
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
    except (FirebaseError, ValueError) as e:
        logger.warning("Invalid authentication token: %s", e)
        raise UnauthenticatedError("Token is not valid")

    request.state.user_id = decoded_token["uid"]
    return AuthenticatedUser(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
    )


async def get_post_repository(request: Request) -> PostRepository:
    """Get post repository from app state"""
    return request.app.state.posts


async def get_user_repository(request: Request) -> UserRepository:
    """Get user repository from app state"""
    return request.app.state.users


async def get_profile_repository(request: Request) -> ProfileRepository:
    """Get profile repository from app state"""
    return request.app.state.profiles


async def get_post_service(
        posts: Annotated[PostRepository, Depends(get_post_repository)],
        users: Annotated[UserRepository, Depends(get_user_repository)],
) -> PostService:
    return PostService(posts, users)


# Type annotations for dependency injection
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
Users = Annotated[UserRepository, Depends(get_user_repository)]
Profiles = Annotated[ProfileRepository, Depends(get_profile_repository)]
