"""
Gmail API client implementing the mailbox gateway.

Relies on google-api-python-client and google-auth with OAuth user
credentials (access + refresh token) supplied through settings.
"""

from typing import Any

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from lead_inbox.config import settings
from lead_inbox.core.logging import get_logger
from lead_inbox.services.base import MailboxGateway

log = get_logger(__name__)

GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/gmail.compose",
]

UNREAD_QUERY = "is:unread"


class MailboxError(RuntimeError):
    """A Gmail API call failed."""


def build_gmail_service(
    access_token: str | None = None,
    refresh_token: str | None = None,
    client_id: str | None = None,
    client_secret: str | None = None,
    timeout: float | None = None,
):
    """
    Create a Gmail API service resource from OAuth user credentials.

    Either token may be omitted; with only a refresh token the access token
    is minted on the first request.
    """
    access_token = access_token or settings.gmail_access_token
    refresh_token = refresh_token or settings.gmail_refresh_token
    if not (access_token or refresh_token):
        raise ValueError("GMAIL_ACCESS_TOKEN or GMAIL_REFRESH_TOKEN is required")

    credentials = Credentials(
        token=access_token or None,
        refresh_token=refresh_token or None,
        token_uri=settings.gmail_token_uri,
        client_id=client_id or settings.gmail_client_id or None,
        client_secret=client_secret or settings.gmail_client_secret or None,
        scopes=GMAIL_SCOPES,
    )
    http = AuthorizedHttp(
        credentials,
        http=httplib2.Http(timeout=timeout or settings.gmail_timeout_seconds),
    )
    return build("gmail", "v1", http=http, cache_discovery=False)


class GmailClient(MailboxGateway):
    """Mailbox gateway backed by the Gmail REST API."""

    def __init__(self, service=None, user_id: str | None = None):
        self.user_id = user_id or settings.gmail_user_id
        self._service = service or build_gmail_service()

    def list_unread(self, max_results: int = 10) -> list[dict[str, Any]]:
        request = self._service.users().messages().list(
            userId=self.user_id,
            q=UNREAD_QUERY,
            maxResults=max_results,
        )
        response = self._execute("list_unread", request)
        return response.get("messages", []) or []

    def get_message(self, message_id: str) -> dict[str, Any]:
        request = self._service.users().messages().get(
            userId=self.user_id,
            id=message_id,
            format="full",
        )
        return self._execute("get_message", request)

    def create_draft(self, thread_id: str, raw: str) -> dict[str, Any]:
        request = self._service.users().drafts().create(
            userId=self.user_id,
            body={"message": {"threadId": thread_id, "raw": raw}},
        )
        draft = self._execute("create_draft", request)
        log.info("gmail_draft_created", draft_id=draft.get("id"), thread_id=thread_id)
        return draft

    def list_labels(self) -> list[dict[str, Any]]:
        request = self._service.users().labels().list(userId=self.user_id)
        response = self._execute("list_labels", request)
        return response.get("labels", []) or []

    def create_label(self, name: str) -> dict[str, Any]:
        request = self._service.users().labels().create(
            userId=self.user_id,
            body={
                "name": name,
                "labelListVisibility": "labelShow",
                "messageListVisibility": "show",
            },
        )
        label = self._execute("create_label", request)
        log.info("gmail_label_created", label=name, label_id=label.get("id"))
        return label

    def add_label(self, message_id: str, label_id: str) -> None:
        request = self._service.users().messages().modify(
            userId=self.user_id,
            id=message_id,
            body={"addLabelIds": [label_id]},
        )
        self._execute("add_label", request)

    def _execute(self, operation: str, request) -> dict[str, Any]:
        """Run a request, converting transport and API errors to MailboxError."""
        try:
            return request.execute() or {}
        except HttpError as e:
            status = getattr(getattr(e, "resp", None), "status", None)
            log.error("gmail_http_error", operation=operation, status=status, error=str(e))
            raise MailboxError(f"Gmail {operation} failed ({status}): {e}") from e
        except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            log.error("gmail_request_error", operation=operation, error=str(e))
            raise MailboxError(f"Failed to reach Gmail during {operation}: {e}") from e
