from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """API shape: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FilterSchema(BaseSchema):
    # Query filters are built from explicit Query() params; unknown keys are a bug.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")
