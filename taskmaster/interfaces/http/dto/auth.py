from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignupRequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=256)

    @field_validator("name", "email", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class LoginRequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=256)

    @field_validator("email", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class UserDTO(BaseModel):
    id: int
    name: str
    email: str


class AuthSuccessDTO(BaseModel):
    token: str
    user: UserDTO


class OkDTO(BaseModel):
    ok: bool = True
