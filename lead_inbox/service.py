"""
Lead monitor service: owns all process-wide state.

Constructed once at startup and shared by the HTTP handlers and the
scheduler, so nothing in the pipeline relies on module globals.
"""

from threading import Lock

from lead_inbox.classifiers.lead import LeadClassifier
from lead_inbox.config import Settings, settings as default_settings
from lead_inbox.core.activity import ActivityLog
from lead_inbox.core.ledger import ProcessingLedger
from lead_inbox.core.logging import get_logger
from lead_inbox.core.models import CycleReport
from lead_inbox.drafters.reply import ResponseDrafter
from lead_inbox.handlers.dispatcher import Dispatcher
from lead_inbox.processors.pacing import Pacing
from lead_inbox.processors.poll import DEFAULT_PAGE_SIZE, PollProcessor
from lead_inbox.services.base import InferenceGateway, MailboxGateway

log = get_logger(__name__)


class CycleInProgressError(RuntimeError):
    """Raised when a non-waiting caller finds a cycle already running."""


class LeadMonitorService:
    """
    Wires the pipeline together and guards it with a single-flight lock.

    At most one cycle runs at a time. Callers passing wait=True queue
    behind the running cycle; wait=False callers get CycleInProgressError.
    """

    def __init__(
        self,
        mailbox: MailboxGateway,
        inference: InferenceGateway,
        ledger: ProcessingLedger | None = None,
        activity: ActivityLog | None = None,
        pacing: Pacing | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.mailbox = mailbox
        self.inference = inference
        self.ledger = ledger if ledger is not None else ProcessingLedger()
        self.activity = activity if activity is not None else ActivityLog()
        self.processor = PollProcessor(
            mailbox=mailbox,
            classifier=LeadClassifier(inference),
            drafter=ResponseDrafter(inference),
            dispatcher=Dispatcher(mailbox),
            ledger=self.ledger,
            pacing=pacing,
            page_size=page_size,
        )
        self._cycle_lock = Lock()

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "LeadMonitorService":
        """Build the service with real Gmail and Gemini clients."""
        from lead_inbox.services.gemini import GeminiClient
        from lead_inbox.services.gmail import GmailClient, build_gmail_service

        config = config or default_settings
        gmail_service = build_gmail_service(
            access_token=config.gmail_access_token,
            refresh_token=config.gmail_refresh_token,
            client_id=config.gmail_client_id,
            client_secret=config.gmail_client_secret,
            timeout=config.gmail_timeout_seconds,
        )
        return cls(
            mailbox=GmailClient(service=gmail_service, user_id=config.gmail_user_id),
            inference=GeminiClient(
                api_key=config.gemini_api_key,
                model=config.gemini_model,
                timeout_seconds=config.inference_timeout_seconds,
            ),
            pacing=Pacing(config.pacing_seconds),
            page_size=config.poll_page_size,
        )

    def run_cycle(self, wait: bool = True) -> CycleReport:
        """
        Run one polling cycle under the single-flight guard.

        Args:
            wait: Block until a running cycle finishes instead of failing

        Raises:
            CycleInProgressError: If wait is False and a cycle is running
            Exception: Whole-cycle failures (e.g. listing unread mail)
        """
        if not self._cycle_lock.acquire(blocking=wait):
            raise CycleInProgressError("A polling cycle is already running")
        try:
            return self.processor.run_cycle()
        except Exception as e:
            log.error("cycle_failed", error=str(e))
            raise
        finally:
            self._cycle_lock.release()

    @property
    def cycle_running(self) -> bool:
        return self._cycle_lock.locked()

    def stats(self) -> dict[str, int]:
        return {
            "processedEmails": len(self.ledger),
            "totalLogs": len(self.activity),
        }
