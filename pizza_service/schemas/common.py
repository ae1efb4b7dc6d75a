"""
Shared schema bases.

The HTTP API speaks camelCase (``franchiseId``, ``dinerId``); Python code uses
snake_case. CamelModel maps between the two: responses serialize by alias,
and requests accept either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str
