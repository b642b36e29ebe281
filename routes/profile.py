from fastapi import APIRouter

from dependencies import CurrentUser, Profiles
from errors import BadRequestError
from models.profile import Profile

router = APIRouter()


@router.get("/me")
def get_my_profile(current_user: CurrentUser, profiles: Profiles) -> Profile:
    profile = profiles.find_by_user(current_user.user_id)
    if profile is None:
        raise BadRequestError("There is no profile for this user")
    return profile
