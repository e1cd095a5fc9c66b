from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

from shared.security.roles import Role

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=150)]
Password = Annotated[str, StringConstraints(min_length=1)]


class UserCreate(BaseModel):
    username: Username
    password: Password
    role: Role = Role.CUSTOMER


class UserLogin(BaseModel):
    username: Username
    password: Password


class TokenResponse(BaseModel):
    token: str
    role: Role


class UserResponse(BaseModel):
    id: int
    username: str
    role: Role

    model_config = ConfigDict(from_attributes=True)
