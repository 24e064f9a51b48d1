from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class CompanyDetailsSchema(BaseModel):
    id: int
    company_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None
    is_active: bool = True
    model_config = ConfigDict(from_attributes=True)

# what clients send
class CompanyDetailsPayload(BaseModel):
    company_name: str = Field(min_length=1, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None
    is_active: bool = True
    model_config = ConfigDict(extra="forbid")

class CompanyDetailsUpdate(BaseModel):
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None
    is_active: Optional[bool] = None

Align = Literal["left", "center", "right"]

class LetterHeadSchema(BaseModel):
    id: int
    letter_head_name: str
    letter_head_image: Optional[str] = None
    letter_head_image_height: Optional[str] = None
    letter_head_image_width: Optional[str] = None
    letter_head_align: str = "center"
    letter_head_footer_image: Optional[str] = None
    letter_head_footer_image_height: Optional[str] = None
    letter_head_footer_image_width: Optional[str] = None
    letter_head_footer_align: str = "center"
    model_config = ConfigDict(from_attributes=True)

class LetterHeadPayload(BaseModel):
    letter_head_name: str = Field(min_length=1, max_length=255)
    letter_head_image: Optional[str] = Field(default=None, max_length=500)
    letter_head_image_height: Optional[str] = Field(default=None, max_length=50)
    letter_head_image_width: Optional[str] = Field(default=None, max_length=50)
    letter_head_align: Align = "center"
    letter_head_footer_image: Optional[str] = Field(default=None, max_length=500)
    letter_head_footer_image_height: Optional[str] = Field(default=None, max_length=50)
    letter_head_footer_image_width: Optional[str] = Field(default=None, max_length=50)
    letter_head_footer_align: Align = "center"
    model_config = ConfigDict(extra="forbid")

class LetterHeadUpdate(BaseModel):
    letter_head_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    letter_head_image: Optional[str] = Field(default=None, max_length=500)
    letter_head_image_height: Optional[str] = Field(default=None, max_length=50)
    letter_head_image_width: Optional[str] = Field(default=None, max_length=50)
    letter_head_align: Optional[Align] = None
    letter_head_footer_image: Optional[str] = Field(default=None, max_length=500)
    letter_head_footer_image_height: Optional[str] = Field(default=None, max_length=50)
    letter_head_footer_image_width: Optional[str] = Field(default=None, max_length=50)
    letter_head_footer_align: Optional[Align] = None

# setup dashboard summary
class DashboardStats(BaseModel):
    total_users: int
    active_users: int
    inactive_users: int
    company_configured: bool
    letter_head_configured: bool
    company_details: Optional[CompanyDetailsSchema] = None
    letter_head: Optional[LetterHeadSchema] = None
