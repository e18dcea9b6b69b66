"""
Base model for snapboard data structures.
"""

from pydantic import BaseModel as PydanticBaseModel, ConfigDict


class BaseModel(PydanticBaseModel):
    """
    Base model for all snapboard data structures.
    
    Values are per-request and immutable once produced.
    """
    
    model_config = ConfigDict(
        # Allow field population by name or alias
        populate_by_name=True,
        frozen=True,
        # Use enum values instead of enum names
        use_enum_values=True,
        validate_default=True,
        extra="forbid",
    )
