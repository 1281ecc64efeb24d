"""Base schema with the camelCase wire format used by the web client."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Schema base that reads and writes camelCase JSON.

    Python code uses snake_case attribute names; FastAPI serializes response
    models by alias, so clients only ever see camelCase keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Generic acknowledgement."""

    success: bool = True
    message: str
