from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Request/response bodies use camelCase on the wire and snake_case in Python.
camel_config = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class ApiModel(BaseModel):
    model_config = camel_config
