"""
Abstract base class for email classifiers.
"""

from abc import ABC, abstractmethod

from lead_inbox.core.models import ClassificationVerdict


class BaseClassifier(ABC):
    """Abstract classifier interface."""

    @abstractmethod
    def classify(self, subject: str, body: str) -> ClassificationVerdict:
        """
        Judge whether a message is a business lead.

        Implementations must not raise; failures degrade to
        ClassificationVerdict.fallback().

        Args:
            subject: Message subject
            body: Plain-text message body

        Returns:
            ClassificationVerdict with confidence clamped to [0, 1]
        """
        pass
