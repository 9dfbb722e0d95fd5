"""
Abstract gateway contracts for the remote services the pipeline consumes.
"""

from abc import ABC, abstractmethod
from typing import Any


class MailboxGateway(ABC):
    """Remote mailbox: message listing/fetch, drafts and labels."""

    @abstractmethod
    def list_unread(self, max_results: int = 10) -> list[dict[str, Any]]:
        """
        List unread message stubs.

        Returns:
            List of dicts carrying at least an "id" key
        """
        pass

    @abstractmethod
    def get_message(self, message_id: str) -> dict[str, Any]:
        """Fetch a full message resource (headers + payload)."""
        pass

    @abstractmethod
    def create_draft(self, thread_id: str, raw: str) -> dict[str, Any]:
        """
        Create a draft on a thread.

        Args:
            thread_id: Thread the reply belongs to
            raw: base64url-encoded RFC 822 message

        Returns:
            The created draft resource
        """
        pass

    @abstractmethod
    def list_labels(self) -> list[dict[str, Any]]:
        """List labels as dicts with "id" and "name"."""
        pass

    @abstractmethod
    def create_label(self, name: str) -> dict[str, Any]:
        """Create a label visible in the label list and message list."""
        pass

    @abstractmethod
    def add_label(self, message_id: str, label_id: str) -> None:
        """Add a label to a message, leaving its other labels untouched."""
        pass


class InferenceGateway(ABC):
    """Remote language model: prompt in, completion text out."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int | None = None,
    ) -> str:
        """
        Return the model's completion for a single-turn prompt.

        Raises:
            Exception: Any provider failure; callers decide how to degrade
        """
        pass
