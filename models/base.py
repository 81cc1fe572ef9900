"""
Base schemas for all models.

Collaborator payloads arrive in camelCase; every schema accepts both the
alias and the snake_case field name.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Accept field names as well as aliases
        - Allow attribute objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )


class FrozenSchema(BaseSchema):
    """Immutable, hashable schema for keys and configuration."""
    model_config = ConfigDict(frozen=True)
