import uuid

from pydantic import BaseModel, ConfigDict


class DocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    file_path: str
    status: str
    type: str
    accepted: int


class DocumentAdminRead(DocumentRead):
    user_name: str


class VerifyRequest(BaseModel):
    status: str
