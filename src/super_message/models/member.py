"""
Member — the identity behind a verified request token.
"""

from pydantic import BaseModel, Field


class Member(BaseModel):
    """Stable across channels for the same user under one developer account,
    so ``open_id`` can be used as the key for per-user data."""
    channel_creator: bool = Field(default=False, alias="channelCreator")
    expired_at: int = Field(default=0, alias="expiredAt")  # unix seconds
    open_id: str = Field(default="", alias="openID")

    model_config = {"populate_by_name": True, "frozen": True}
