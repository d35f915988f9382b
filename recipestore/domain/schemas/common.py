"""
Base classes shared by the input-contract and read schemas.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Range of the INTEGER columns on every supported backend
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

DbInt = Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]


class InsertSchema(BaseModel):
    """Insertable whitelist: unknown fields are rejected, enums stored as values"""

    model_config = ConfigDict(
        extra="forbid", use_enum_values=True, str_strip_whitespace=True
    )


class UpdateSchema(BaseModel):
    """Mutable surface of an entity; only fields the caller sets are applied"""

    model_config = ConfigDict(
        extra="forbid", use_enum_values=True, str_strip_whitespace=True
    )


class ReadSchema(BaseModel):
    """Stored row as handed back to callers"""

    model_config = ConfigDict(from_attributes=True)
