from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, ConfigDict, Field

class UserSchema(BaseModel):
    id: int
    email: EmailStr
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    display_name: str = ""
    role_names: list[str] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    roles: Optional[list[str]] = None
    model_config = ConfigDict(extra="forbid")

class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    is_active: Optional[bool] = None
    # None leaves roles alone, [] clears them
    roles: Optional[list[str]] = None

class UserRolesUpdate(BaseModel):
    roles: list[str]
    model_config = ConfigDict(extra="forbid")
