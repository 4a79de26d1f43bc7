# jobboard/schemas/base.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema: camelCase on the wire, snake_case in Python.
    Both spellings are accepted on input; responses are serialized by alias.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
