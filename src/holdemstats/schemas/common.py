# src/holdemstats/schemas/common.py

"""Common Pydantic configuration shared by every wire schema."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model for records received from the game API.

    The API speaks camelCase JSON; attributes are snake_case. Records are
    frozen so a snapshot handed to subscribers can never be edited in place.
    Unknown fields sent by newer servers are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
