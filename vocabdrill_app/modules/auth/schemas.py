from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    username: str
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    current_password: Optional[str] = Field(default=None, alias='currentPassword')
    new_password: str = Field(alias='newPassword')


class AdminUserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    username: str
    password: Optional[str] = None
    is_admin: bool = Field(default=False, alias='isAdmin')


class AdminUserUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    username: Optional[str] = Field(default=None, alias='newUsername')
    password: Optional[str] = Field(default=None, alias='newPassword')
    is_admin: Optional[bool] = Field(default=None, alias='isAdmin')
