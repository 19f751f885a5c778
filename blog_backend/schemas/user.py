"""Pydantic schemas for `User` domain objects."""

from datetime import datetime
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from blog_backend.models.user import UserRole


PHONE_PATTERN = re.compile(r"^\+?\d{8,15}$")


def _check_phone(v: Optional[str]) -> Optional[str]:
	if v is None or v == "":
		return v
	if not PHONE_PATTERN.match(v):
		raise ValueError("Phone must be 8-15 digits, optional leading '+'")
	return v


class UserBase(BaseModel):
	name: str = Field(..., min_length=2, max_length=50)
	email: EmailStr
	phone: Optional[str] = None
	bio: Optional[str] = Field(None, max_length=500)
	profile_picture: Optional[str] = Field(None, max_length=500)

	@field_validator("phone")
	@classmethod
	def validate_phone(cls, v: Optional[str]) -> Optional[str]:
		return _check_phone(v)


class UserCreate(UserBase):
	password: str = Field(..., min_length=6)
	role: UserRole = UserRole.USER

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"name": "Ada Lovelace",
			"email": "ada@example.com",
			"password": "StrongPass!234",
			"phone": "+441234567890",
			"role": "USER",
			"bio": "Writes about engines.",
		}
	})


class UserUpdate(BaseModel):
	name: Optional[str] = Field(None, min_length=2, max_length=50)
	email: Optional[EmailStr] = None
	password: Optional[str] = Field(None, min_length=6)
	phone: Optional[str] = None
	bio: Optional[str] = Field(None, max_length=500)
	profile_picture: Optional[str] = Field(None, max_length=500)
	role: Optional[UserRole] = None

	@field_validator("phone")
	@classmethod
	def validate_phone(cls, v: Optional[str]) -> Optional[str]:
		return _check_phone(v)


class UserResponse(BaseModel):
	id: int
	name: str
	email: str
	phone: Optional[str] = None
	bio: Optional[str] = None
	profile_picture: Optional[str] = None
	role: UserRole
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
	"""Author info embedded in posts and comments."""
	id: int
	name: str
	email: str
	profile_picture: Optional[str] = None

	model_config = ConfigDict(from_attributes=True)


class UserLogin(BaseModel):
	email: EmailStr
	password: str

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "ada@example.com",
			"password": "StrongPass!234",
		}
	})


class TokenResponse(BaseModel):
	access_token: str
	token_type: str = "bearer"


class RegisterResponse(TokenResponse):
	user: UserResponse
