"""
Shared pytest fixtures for lead_inbox tests.
"""

import base64
import json
import logging

import pytest
import structlog

from lead_inbox.classifiers.lead import CLASSIFY_TEMPERATURE
from lead_inbox.core.models import InboundMessage
from lead_inbox.processors.pacing import Pacing
from lead_inbox.service import LeadMonitorService
from lead_inbox.services.base import InferenceGateway, MailboxGateway


def encode_body(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


def make_raw_message(
    message_id: str,
    subject: str = "Question about your pricing",
    sender: str = "Dana Client <dana@example.com>",
    recipient: str = "sales@example.org",
    body: str = "Hi, could you send me pricing for your consulting services?",
    thread_id: str | None = None,
) -> dict:
    """Gmail `users.messages.get(format="full")` shaped resource."""
    return {
        "id": message_id,
        "threadId": thread_id or f"thread-{message_id}",
        "payload": {
            "mimeType": "text/plain",
            "headers": [
                {"name": "Subject", "value": subject},
                {"name": "From", "value": sender},
                {"name": "To", "value": recipient},
            ],
            "body": {"data": encode_body(body)},
        },
    }


class FakeMailbox(MailboxGateway):
    """In-memory mailbox recording every call."""

    def __init__(self, messages: list[dict] | None = None, labels: list[dict] | None = None):
        self.messages = {m["id"]: m for m in (messages or [])}
        self.unread = [m["id"] for m in (messages or [])]
        self.labels = list(labels or [])
        self.list_calls: list[int] = []
        self.fetched: list[str] = []
        self.drafts: list[dict] = []
        self.created_labels: list[str] = []
        self.applied: list[tuple[str, str]] = []
        self.fail_list = False
        self.fail_draft_for: set[str] = set()
        self.fail_list_labels = False
        self.fail_add_label = False

    def list_unread(self, max_results: int = 10) -> list[dict]:
        self.list_calls.append(max_results)
        if self.fail_list:
            raise RuntimeError("mailbox unavailable")
        return [{"id": mid, "threadId": f"thread-{mid}"} for mid in self.unread[:max_results]]

    def get_message(self, message_id: str) -> dict:
        self.fetched.append(message_id)
        return self.messages[message_id]

    def create_draft(self, thread_id: str, raw: str) -> dict:
        decoded = base64.urlsafe_b64decode(raw).decode("utf-8")
        for mid in self.fail_draft_for:
            if f"In-Reply-To: {mid}\r\n" in decoded:
                raise RuntimeError(f"draft rejected for {mid}")
        draft = {"id": f"draft-{len(self.drafts) + 1}", "threadId": thread_id, "raw": raw}
        self.drafts.append(draft)
        return draft

    def list_labels(self) -> list[dict]:
        if self.fail_list_labels:
            raise RuntimeError("labels unavailable")
        return list(self.labels)

    def create_label(self, name: str) -> dict:
        label = {"id": f"Label_{len(self.labels) + 1}", "name": name}
        self.labels.append(label)
        self.created_labels.append(name)
        return label

    def add_label(self, message_id: str, label_id: str) -> None:
        if self.fail_add_label:
            raise RuntimeError("modify failed")
        self.applied.append((message_id, label_id))

    def label_name(self, label_id: str) -> str:
        return next(label["name"] for label in self.labels if label["id"] == label_id)


class FakeInference(InferenceGateway):
    """Scripted language model.

    Classification calls (low temperature) return `verdict`; everything
    else returns `reply`. `fail_when(prompt, temperature)` decides which
    calls raise.
    """

    def __init__(
        self,
        verdict: dict | str | None = None,
        reply: str = "Thanks for reaching out! Could we set up a call this week?",
        fail_when=None,
    ):
        self.verdict = verdict if verdict is not None else {
            "isLead": True,
            "confidence": 0.9,
            "reason": "asks about pricing",
            "keywords": ["pricing", "services"],
        }
        self.reply = reply
        self.fail_when = fail_when or (lambda prompt, temperature: False)
        self.calls: list[dict] = []

    def complete(self, prompt: str, *, temperature: float, max_output_tokens: int | None = None) -> str:
        self.calls.append(
            {"prompt": prompt, "temperature": temperature, "max_output_tokens": max_output_tokens}
        )
        if self.fail_when(prompt, temperature):
            raise RuntimeError("inference unavailable")
        if temperature == CLASSIFY_TEMPERATURE:
            return self.verdict if isinstance(self.verdict, str) else json.dumps(self.verdict)
        return self.reply


@pytest.fixture
def sample_message() -> InboundMessage:
    """Decoded inbound lead inquiry."""
    return InboundMessage(
        id="msg-1",
        thread_id="thread-1",
        subject="Question about your pricing",
        sender="Dana Client <dana@example.com>",
        recipient="sales@example.org",
        body="Hi, could you send me pricing for your consulting services?",
    )


@pytest.fixture
def fake_mailbox() -> FakeMailbox:
    return FakeMailbox(messages=[make_raw_message("a"), make_raw_message("b"), make_raw_message("c")])


@pytest.fixture
def fake_inference() -> FakeInference:
    return FakeInference()


@pytest.fixture
def service(fake_mailbox, fake_inference) -> LeadMonitorService:
    """Service wired to fakes with no pacing delay."""
    return LeadMonitorService(mailbox=fake_mailbox, inference=fake_inference, pacing=Pacing(0))


@pytest.fixture
def raw_message():
    """Factory for Gmail-shaped message resources."""
    return make_raw_message


@pytest.fixture
def mailbox_factory():
    return FakeMailbox


@pytest.fixture
def inference_factory():
    return FakeInference


@pytest.fixture
def reset_logging():
    """Restore structlog defaults and the root log level after the test."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)
