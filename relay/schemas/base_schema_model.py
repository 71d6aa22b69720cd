"""Base pydantic model shared by all relay schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Accepts camelCase or snake_case input and reads ORM attributes.

    Mobile clients post camelCase bodies; Django models are passed straight in
    through ``model_validate`` thanks to ``from_attributes``.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
