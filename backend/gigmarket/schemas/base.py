"""Schema Base — camelCase aliasing and shared field types.

Design Decisions:
    - alias_generator=to_camel + populate_by_name: clients send camelCase, tests may use either
    - coerce_numbers_to_str: ids are strings, but clients that send 3 instead of "3" still work
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
EntityId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )
