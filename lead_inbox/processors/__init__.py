"""Email processors."""

from .base import BaseProcessor
from .pacing import Pacing
from .poll import PollProcessor

__all__ = ["BaseProcessor", "Pacing", "PollProcessor"]
