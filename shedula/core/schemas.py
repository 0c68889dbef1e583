from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for request and response bodies; the frontend speaks camelCase."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(ApiModel):
    message: str
