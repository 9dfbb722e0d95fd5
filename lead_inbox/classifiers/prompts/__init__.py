"""
Classification prompts.
"""

from .lead import PROMPT as LEAD_PROMPT

__all__ = ["LEAD_PROMPT"]
