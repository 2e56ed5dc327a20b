"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for models sent to or received from the dashboard.

    Fields serialize under camelCase aliases (``is_me`` -> ``isMe``) so
    responses read the same as the upstream usage records they embed.
    Input is accepted under either name.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiKeyUser(BaseModel):
    """
    The caller identified by an API key.

    Populated by the auth dependency from the upstream key lookup and
    made available to route handlers via dependency injection. The id
    is the "self user" used for ranking redaction.
    """

    id: str = Field(..., description="Upstream API key id")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
