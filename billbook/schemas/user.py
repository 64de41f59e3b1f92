"""User schemas."""

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: str
    email: str | None = None
    username: str | None = None
    avatar_url: str | None = None

    model_config = {"from_attributes": True}
