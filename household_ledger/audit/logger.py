"""
Audit Logger

DESIGN DECISION: Every mutation of the transaction list is logged, and so
is every computed month summary. This provides:
1. Complete traceability
2. Debugging capability when a balance looks wrong
3. A history the UI can show per transaction

The audit logger:
- Writes a structured local log line per event (structlog)
- Keeps an append-only in-memory trail that can be queried by entity
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from household_ledger.config import LedgerSettings, get_settings
from household_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)
from household_ledger.models.budget import BalanceInfo, Transaction


def configure_logging(settings: Optional[LedgerSettings] = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Safe to call more than once; the last call wins.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("household_ledger").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory append-only trail (for the UI and for tests)
    """

    def __init__(self, keep_trail: bool = True):
        """
        Initialize audit logger.

        Args:
            keep_trail: Keep events in memory. If False, only logs locally.
        """
        self._keep_trail = keep_trail
        self._events: list[AuditEvent] = []
        self._logger = structlog.get_logger("household_ledger.audit")

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Always logs locally. Appends to the trail if enabled.
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._keep_trail:
            self._events.append(event)

        return event

    @property
    def events(self) -> list[AuditEvent]:
        """Copy of the trail, oldest first."""
        return list(self._events)

    def events_for_entity(self, entity_id: str) -> list[AuditEvent]:
        return [e for e in self._events if e.entity_id == entity_id]

    def events_for_correlation(self, correlation_id: UUID) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Newest first."""
        return list(reversed(self._events[-limit:])) if limit > 0 else []

    def log_transaction_added(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new transaction."""
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction.id,
            month=transaction.month_key,
            amount=str(transaction.amount),
            buyer=transaction.buyer.value,
            correlation_id=correlation_id,
        ))

    def log_transaction_updated(
        self,
        previous: Transaction,
        current: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a full-replacement edit, recording which fields changed."""
        before = previous.model_dump()
        after = current.model_dump()
        changed = sorted(name for name in after if before.get(name) != after[name])
        self.log(AuditEventBuilder.transaction_updated(
            transaction_id=current.id,
            changed_fields=changed,
            correlation_id=correlation_id,
        ))

    def log_transaction_deleted(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        transaction_id: Optional[str],
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            transaction_id=transaction_id,
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_rollup_computed(
        self,
        month: str,
        total_spent: str,
        available_budget: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.rollup_computed(
            month=month,
            total_spent=total_spent,
            available_budget=available_budget,
            correlation_id=correlation_id,
        ))

    def log_settlement_computed(
        self,
        balance: BalanceInfo,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.settlement_computed(
            month=balance.month,
            who_owes=balance.who_owes.value if balance.who_owes else None,
            amount=str(balance.amount),
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., one dashboard refresh)
    and pass it through all subsequent operations.
    """
    return uuid4()
