"""
Dispatcher: creates the reply draft and files the original message under
its routing label.
"""

import base64
import re
from email import policy
from email.mime.text import MIMEText
from typing import Any

from lead_inbox.core.logging import get_logger
from lead_inbox.services.base import MailboxGateway

log = get_logger(__name__)

_LINE_BREAKS = re.compile(r"[\r\n]+")


def build_reply_envelope(original_message_id: str, to: str, subject: str, body: str) -> MIMEText:
    """
    Build the RFC 822 reply message.

    A UTF-8 text/plain part with To, "Re: "-prefixed Subject, In-Reply-To
    and References (both the original message id). Serializes with CRLF
    line endings.
    """
    message = MIMEText(body, "plain", "utf-8", policy=policy.SMTP)
    message["To"] = _header(to)
    message["Subject"] = f"Re: {_header(subject)}"
    message["In-Reply-To"] = _header(original_message_id)
    message["References"] = _header(original_message_id)
    return message


def encode_envelope(message: MIMEText) -> str:
    """Encode a message for the Gmail API `raw` field (base64url, padded)."""
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")


def _header(value: str) -> str:
    # A line break in a header value would start a new header
    return _LINE_BREAKS.sub(" ", value or "").strip()


class Dispatcher:
    """Creates provider-side drafts and applies routing labels."""

    def __init__(self, mailbox: MailboxGateway):
        self.mailbox = mailbox
        self._label_ids: dict[str, str] = {}

    def dispatch(
        self,
        original_message_id: str,
        to: str,
        subject: str,
        draft_text: str,
        thread_id: str,
    ) -> dict[str, Any]:
        """
        Create a reply draft on the original thread.

        Returns:
            The created draft resource

        Raises:
            Exception: Whatever the mailbox raised; a missing draft is a
                failure the caller must record
        """
        raw = encode_envelope(build_reply_envelope(original_message_id, to, subject, draft_text))
        try:
            draft = self.mailbox.create_draft(thread_id, raw)
        except Exception as e:
            log.error("draft_creation_failed", message_id=original_message_id, error=str(e))
            raise

        log.info("draft_created", message_id=original_message_id, thread_id=thread_id)
        return draft

    def apply_label(self, message_id: str, label_name: str) -> bool:
        """
        Add `label_name` to a message, creating the label if needed.

        Failures are logged and swallowed.

        Returns:
            True if the label was applied
        """
        try:
            label_id = self.resolve_label(label_name)
        except Exception as e:
            log.error("label_resolution_failed", label=label_name, error=str(e))
            return False

        try:
            self.mailbox.add_label(message_id, label_id)
        except Exception as e:
            log.error("label_apply_failed", label=label_name, message_id=message_id, error=str(e))
            # The cached id may point at a deleted label
            self._label_ids.pop(label_name, None)
            return False

        log.info("label_applied", label=label_name, message_id=message_id)
        return True

    def resolve_label(self, label_name: str) -> str:
        """
        Get the id of the label named exactly `label_name`.

        Reuses a cached or existing label before creating a new one.
        """
        cached = self._label_ids.get(label_name)
        if cached:
            return cached

        label_id = None
        for label in self.mailbox.list_labels():
            if label.get("name") == label_name and label.get("id"):
                label_id = label["id"]
                break

        if label_id is None:
            created = self.mailbox.create_label(label_name)
            label_id = created.get("id")
            if not label_id:
                raise RuntimeError(f"Label {label_name!r} was created without an id")
            log.info("label_created", label=label_name, label_id=label_id)

        self._label_ids[label_name] = label_id
        return label_id
