from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def require_text(value, message: str, max_length: int, too_long: str):
    """Shared 'not blank, not too long' check for name-like fields."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(message)
    if isinstance(value, str) and len(value) > max_length:
        raise ValueError(too_long)
    return value
