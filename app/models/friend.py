# app/models/friend.py

from typing import Annotated

from pydantic import ConfigDict, Field

from app.models.base import CamelModel

UserId = Annotated[int, Field(gt=0, strict=True)]
Count = Annotated[int, Field(ge=0, strict=True)]
NonEmptyString = Annotated[str, Field(min_length=1, strict=True)]


class FriendRecord(CamelModel):
    """A friend of the requesting user, enriched with graph counts."""

    model_config = ConfigDict(frozen=True)

    id: UserId
    full_name: NonEmptyString
    phone_number: NonEmptyString
    total_friend_count: Count
    mutual_friend_count: Count
