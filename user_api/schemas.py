from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name of the user")
    email: str = Field(..., max_length=255, description="Email address; normalized to lower case on save")


class UpdateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="New display name")
    email: str = Field(..., max_length=255, description="New email address")


class UserResponse(BaseModel):
    # camelCase on the wire (createdAt/updatedAt); snake_case still accepted on input.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None
