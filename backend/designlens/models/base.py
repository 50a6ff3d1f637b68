"""Shared pydantic configuration for payload and result records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Immutable record serialized with camelCase keys.

    Input accepts either the camelCase alias or the Python field name.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
