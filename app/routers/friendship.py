# app/routers/friendship.py

from typing import List

from fastapi import APIRouter, Depends, Path, status

from app.common.deps import get_current_user, get_friendship_service
from app.models.friendship import FriendshipRequestCreate, FriendshipRequestRead
from app.models.user import User
from app.services.friendship_service import FriendshipService

router = APIRouter()


@router.post("", response_model=FriendshipRequestRead, status_code=status.HTTP_201_CREATED)
def send_friendship_request(
    request_in: FriendshipRequestCreate,
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    return friendship_service.send_request(current_user.id, request_in.friend_user_id)


@router.get("/outgoing", response_model=List[FriendshipRequestRead])
def get_my_outgoing_requests(
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    return friendship_service.get_outgoing_requests(current_user.id)


@router.post("/{friend_user_id}/accept", response_model=FriendshipRequestRead)
def accept_friendship_request(
    friend_user_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    return friendship_service.accept_request(current_user.id, friend_user_id)


@router.post("/{friend_user_id}/decline", response_model=FriendshipRequestRead)
def decline_friendship_request(
    friend_user_id: int = Path(gt=0),
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    return friendship_service.decline_request(current_user.id, friend_user_id)
