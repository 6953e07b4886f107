from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Публичное представление пользователя, без хеша пароля и версии"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    email: str
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )


class RegisterResponse(BaseModel):
    user: UserResponse


class DashboardResponse(BaseModel):
    user: UserResponse


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class ProtectedResponse(BaseModel):
    message: str
    claims: dict
