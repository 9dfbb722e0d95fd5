"""Draft and label dispatch."""

from .dispatcher import Dispatcher, build_reply_envelope, encode_envelope

__all__ = ["Dispatcher", "build_reply_envelope", "encode_envelope"]
