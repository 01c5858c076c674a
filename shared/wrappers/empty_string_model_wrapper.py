import re
from typing import Any

from pydantic import BaseModel, model_validator

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Strip strings (and invisible marks pasted from spreadsheets); blank becomes None."""
    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    if isinstance(value, str):
        cleaned = INVISIBLE_CHARS_PATTERN.sub("", value).strip()
        return None if cleaned == "" else cleaned

    return value


class EmptyStringModel(BaseModel):
    """Query/filter model where `?status=` means "no filter" rather than an empty match."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return deep_clean(values)
        return values
