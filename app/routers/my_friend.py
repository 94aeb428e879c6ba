# app/routers/my_friend.py

from typing import List

from fastapi import APIRouter, Depends, Path

from app.common.deps import get_current_user, get_friend_service
from app.models.friend import FriendRecord
from app.models.user import User
from app.services.friend_service import FriendService

router = APIRouter()


@router.get("", response_model=List[FriendRecord])
def get_all_friends(
    current_user: User = Depends(get_current_user),
    friend_service: FriendService = Depends(get_friend_service),
):
    return friend_service.get_all_friends(current_user.id)


@router.get("/{friend_user_id}", response_model=FriendRecord)
def get_friend_by_id(
    friend_user_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    friend_service: FriendService = Depends(get_friend_service),
):
    return friend_service.get_friend(current_user.id, friend_user_id)
