from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserIn(BaseModel):
    """Request body for create and update. Id and CreatedAt are ignored."""

    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = Field(
        None, validation_alias=AliasChoices("Username", "username")
    )
    email: Optional[str] = Field(
        None, validation_alias=AliasChoices("Email", "email")
    )


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="Id")
    username: str = Field(alias="Username")
    email: str = Field(alias="Email")
    created_at: datetime = Field(alias="CreatedAt")  # UTC, set once
