"""Reply drafting."""

from .reply import ResponseDrafter, fallback_reply

__all__ = ["ResponseDrafter", "fallback_reply"]
