from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class ApplicationSchema(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    is_group: bool = False
    url: Optional[str] = None
    icon_image_url: Optional[str] = None
    icon_class: Optional[str] = None
    area_name: str
    model_config = ConfigDict(from_attributes=True)

# one node of a user's navigation menu
class MenuItem(ApplicationSchema):
    children: list[MenuItem] = Field(default_factory=list)
