"""
Lead classifier backed by the inference gateway.
"""

import json

from lead_inbox.classifiers.base import BaseClassifier
from lead_inbox.classifiers.prompts import LEAD_PROMPT
from lead_inbox.core.logging import get_logger
from lead_inbox.core.models import ClassificationVerdict
from lead_inbox.services.base import InferenceGateway

log = get_logger(__name__)

# Low temperature keeps judgements consistent between runs
CLASSIFY_TEMPERATURE = 0.3
BODY_CHAR_LIMIT = 3000


class LeadClassifier(BaseClassifier):
    """Classifies messages as business leads via a language model."""

    def __init__(self, inference: InferenceGateway):
        self.inference = inference

    def classify(self, subject: str, body: str) -> ClassificationVerdict:
        """
        Classify a message.

        Gateway errors, malformed JSON and unexpected schemas all collapse
        into the fallback verdict (not a lead, zero confidence).
        """
        prompt = LEAD_PROMPT.format(
            subject=subject,
            body=(body or "")[:BODY_CHAR_LIMIT],
        )

        try:
            response_text = self.inference.complete(prompt, temperature=CLASSIFY_TEMPERATURE)
            verdict = ClassificationVerdict.from_dict(self._parse_response(response_text))
        except Exception as e:
            log.error("classification_failed", error=str(e))
            return ClassificationVerdict.fallback()

        log.info(
            "email_classified",
            is_lead=verdict.is_lead,
            confidence=verdict.confidence,
            subject=subject[:50] if subject else None,
        )
        return verdict

    def _parse_response(self, response_text: str) -> dict:
        """
        Parse JSON from the model response.

        Raises:
            json.JSONDecodeError: If the text is not valid JSON
        """
        text = response_text.strip()

        # Remove markdown code blocks if present
        if text.startswith("```"):
            lines = text.split("\n")
            lines = lines[1:]  # Remove opening ```
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]  # Remove closing ```
            text = "\n".join(lines)

        return json.loads(text)
