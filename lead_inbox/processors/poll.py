"""
Poll cycle processor.

One cycle: list unread messages, drop the ones already in the ledger, then
for each remaining message fetch → decode → classify → draft → dispatch →
label, strictly one message at a time.
"""

from lead_inbox.classifiers.base import BaseClassifier
from lead_inbox.core.decoder import decode_message
from lead_inbox.core.ledger import ProcessingLedger
from lead_inbox.core.logging import bind_context, clear_context, get_logger
from lead_inbox.core.models import CycleReport, ProcessingResult, is_effective_lead, label_for
from lead_inbox.drafters.reply import ResponseDrafter
from lead_inbox.handlers.dispatcher import Dispatcher
from lead_inbox.processors.base import BaseProcessor
from lead_inbox.processors.pacing import Pacing
from lead_inbox.services.base import MailboxGateway

log = get_logger(__name__)

DEFAULT_PAGE_SIZE = 10


class PollProcessor(BaseProcessor):
    """
    Processes unread mail once per message per process lifetime.

    Every attempted message goes into the ledger, whether it succeeded or
    not, so a permanently broken message is not retried every cycle.
    """

    def __init__(
        self,
        mailbox: MailboxGateway,
        classifier: BaseClassifier,
        drafter: ResponseDrafter,
        dispatcher: Dispatcher,
        ledger: ProcessingLedger,
        pacing: Pacing | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.mailbox = mailbox
        self.classifier = classifier
        self.drafter = drafter
        self.dispatcher = dispatcher
        self.ledger = ledger
        self.pacing = pacing or Pacing(1.0)
        self.page_size = page_size

    def run_cycle(self) -> CycleReport:
        """
        Run one polling cycle.

        Raises:
            Exception: If listing unread messages fails
        """
        log.info("checking_for_new_emails")

        stubs = self.mailbox.list_unread(max_results=self.page_size)
        if not stubs:
            log.info("no_new_emails")
            return CycleReport()

        candidate_ids = [str(stub["id"]) for stub in stubs if stub.get("id")]
        new_ids = self.ledger.unseen(candidate_ids)
        if not new_ids:
            log.info("no_unprocessed_emails", listed=len(candidate_ids))
            return CycleReport()

        log.info("processing_new_emails", count=len(new_ids))

        results: list[ProcessingResult] = []
        for index, message_id in enumerate(new_ids):
            if index > 0:
                self.pacing.wait()
            try:
                bind_context(message_id=message_id)
                results.append(self.process_message(message_id))
            finally:
                self.ledger.add(message_id)
                clear_context()

        report = CycleReport(processed_count=len(new_ids), results=results)
        log.info(
            "cycle_complete",
            processed=report.processed_count,
            errors=sum(1 for r in results if not r.success),
        )
        return report

    def process_message(self, message_id: str) -> ProcessingResult:
        """
        Run the full pipeline for one message.

        Never raises: any error becomes a failed ProcessingResult.
        """
        try:
            message = decode_message(self.mailbox.get_message(message_id))
            log.info("email_processing_started", sender=message.sender, subject=message.subject)

            verdict = self.classifier.classify(message.subject, message.body)
            is_lead = is_effective_lead(verdict)
            log.info(
                "email_analyzed",
                is_lead=is_lead,
                confidence=verdict.confidence,
                reason=verdict.reason,
            )

            draft_text = self.drafter.draft(message, is_lead)
            self.dispatcher.dispatch(
                message_id,
                message.sender,
                message.subject,
                draft_text,
                message.thread_id,
            )

            label = label_for(verdict).value
            labeled = self.dispatcher.apply_label(message_id, label)

            log.info("email_processed", label=label, label_applied=labeled)
            return ProcessingResult(
                success=True,
                message_id=message_id,
                sender=message.sender,
                subject=message.subject,
                is_lead=is_lead,
                confidence=verdict.confidence,
                label=label,
                label_applied=labeled,
            )

        except Exception as e:
            log.error("email_processing_error", error=str(e))
            return ProcessingResult.failed(message_id, str(e))
