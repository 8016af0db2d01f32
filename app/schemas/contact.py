from uuid import UUID
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator

EntityType = Literal["deal", "buying_party"]


class ContactBase(BaseModel):
    name: str = Field(min_length=1)
    role: str
    email: str | None = None
    phone: str | None = None


class ContactCreate(ContactBase):
    """Create a contact, optionally linking it to a deal or buying party"""
    entity_id: UUID | None = None
    entity_type: EntityType | None = None

    @model_validator(mode="after")
    def check_entity_pair(self):
        if (self.entity_id is None) != (self.entity_type is None):
            raise ValueError("entity_id and entity_type must be given together")
        return self


class ContactResponse(ContactBase):
    id: UUID
    entity_id: UUID | None = None
    entity_type: EntityType | None = None

    model_config = ConfigDict(from_attributes=True)
