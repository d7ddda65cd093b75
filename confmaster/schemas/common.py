import uuid

from pydantic import BaseModel


class CreatedResponse(BaseModel):
    id: uuid.UUID


class SuccessResponse(BaseModel):
    success: bool = True
