from pydantic import BaseModel, ConfigDict, Field

class RoleSchema(BaseModel):
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)

class RoleCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    model_config = ConfigDict(extra="forbid")

# full replace of a role's application permissions
class RoleApplicationsUpdate(BaseModel):
    application_ids: list[int]
    model_config = ConfigDict(extra="forbid")
