"""
Reply drafter: writes the body of the draft response for a message.
"""

from lead_inbox.core.logging import get_logger
from lead_inbox.core.models import InboundMessage
from lead_inbox.drafters.prompts import (
    ACKNOWLEDGE_FALLBACK_REPLY,
    ACKNOWLEDGE_PROMPT,
    LEAD_FALLBACK_REPLY,
    LEAD_REPLY_PROMPT,
)
from lead_inbox.services.base import InferenceGateway

log = get_logger(__name__)

DRAFT_TEMPERATURE = 0.7
DRAFT_MAX_OUTPUT_TOKENS = 300
BODY_CHAR_LIMIT = 3000


class ResponseDrafter:
    """Generates reply text, falling back to a canned reply on failure."""

    def __init__(self, inference: InferenceGateway):
        self.inference = inference

    def draft(self, message: InboundMessage, is_lead: bool) -> str:
        """
        Draft a reply for `message`.

        Leads get a warm reply with a call to action; everything else a
        short acknowledgment. Never returns an empty string.
        """
        template = LEAD_REPLY_PROMPT if is_lead else ACKNOWLEDGE_PROMPT
        prompt = template.format(
            subject=message.subject,
            body=message.body[:BODY_CHAR_LIMIT],
            sender=message.sender,
        )

        try:
            text = self.inference.complete(
                prompt,
                temperature=DRAFT_TEMPERATURE,
                max_output_tokens=DRAFT_MAX_OUTPUT_TOKENS,
            ).strip()
        except Exception as e:
            log.error("draft_generation_failed", error=str(e), is_lead=is_lead)
            return fallback_reply(is_lead)

        if not text:
            log.warning("draft_generation_empty", is_lead=is_lead)
            return fallback_reply(is_lead)

        log.info("draft_generated", is_lead=is_lead, length=len(text))
        return text


def fallback_reply(is_lead: bool) -> str:
    """Canned reply used when generation fails."""
    return LEAD_FALLBACK_REPLY if is_lead else ACKNOWLEDGE_FALLBACK_REPLY
