"""Reporting of registrations left half-done.

When account creation succeeds but a later write fails, the credential is
orphaned. Nothing is rolled back; the event is logged and stored so an
administrator can finish or remove the registration.
"""

from src.chancery.core.logging import get_logger
from src.chancery.models.reconciliation import InconsistentStateWarning
from src.chancery.repositories import ReconciliationRepository

logger = get_logger(__name__)


class ReconciliationService:
    """Records InconsistentStateWarning events.

    Fire-and-forget design: a failure to persist the event must not mask
    the original registration failure.
    """

    def __init__(self, reconciliation_repo: ReconciliationRepository):
        self.reconciliation_repo = reconciliation_repo

    async def report(self, warning: InconsistentStateWarning) -> InconsistentStateWarning:
        logger.warning(
            "Registration left in inconsistent state",
            event_id=warning.id,
            uid=warning.uid,
            failed_step=warning.failed_step,
            completed_steps=warning.completed_steps,
            invite_id=warning.invite_id,
            error=warning.error,
        )
        try:
            await self.reconciliation_repo.add(warning)
        except Exception as e:
            # Fire-and-forget: the log line above is the record of last resort
            logger.error(
                "Failed to persist inconsistent state event",
                event_id=warning.id,
                error=str(e),
            )
        return warning

    async def list_open(self) -> list[InconsistentStateWarning]:
        events = await self.reconciliation_repo.find()
        return sorted(events, key=lambda event: event.created_at)
