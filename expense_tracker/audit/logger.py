"""
Audit Logger

Every ledger mutation, budget overrun and store failure is logged as
a structured event. This provides:
1. Traceability of changes to the ledger and budget
2. Debugging capability when a stored document is unreadable
3. A history of budget overruns

The audit logger never raises: a failure to log must not turn a
successful command into a failed one.
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Events are written through structlog at the event's severity.
    A correlation id ties together all events of one CLI command.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("expense_tracker.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        if event.correlation_id is None:
            event = event.model_copy(update={"correlation_id": self.correlation_id})
        log_dict = event.to_log_dict()

        try:
            severity = event.severity.value
            if severity == "error":
                self._logger.error("audit_event", **log_dict)
            elif severity == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif severity == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Don't let logging failures break the command
            self._logger.error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )

    def log_expense_added(
        self,
        expense_id: int,
        category: str,
        amount: str,
    ) -> None:
        """Log a new expense."""
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            category=category,
            amount=amount,
            correlation_id=self.correlation_id,
        ))

    def log_budget_exceeded(
        self,
        month: int,
        monthly_budget: str,
        projected_total: str,
    ) -> None:
        """Log a budget overrun."""
        self.log(AuditEventBuilder.budget_exceeded(
            month=month,
            monthly_budget=monthly_budget,
            projected_total=projected_total,
            correlation_id=self.correlation_id,
        ))

    def log_expense_deleted(self, expense_id: int, renumbered_count: int) -> None:
        """Log a deletion."""
        self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            renumbered_count=renumbered_count,
            correlation_id=self.correlation_id,
        ))

    def log_expense_not_found(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_not_found(
            expense_id=expense_id,
            correlation_id=self.correlation_id,
        ))

    def log_budget_set(
        self,
        monthly_budget: str,
        previous_budget: Optional[str],
    ) -> None:
        """Log a budget change."""
        self.log(AuditEventBuilder.budget_set(
            monthly_budget=monthly_budget,
            previous_budget=previous_budget,
            correlation_id=self.correlation_id,
        ))

    def log_expenses_listed(self, result_count: int, category: Optional[str] = None) -> None:
        self.log(AuditEventBuilder.expenses_listed(
            result_count=result_count,
            category=category,
            correlation_id=self.correlation_id,
        ))

    def log_summary_computed(self, month: int, total: str) -> None:
        self.log(AuditEventBuilder.summary_computed(
            month=month,
            total=total,
            correlation_id=self.correlation_id,
        ))

    def log_export_written(self, path: str, row_count: int) -> None:
        """Log an export."""
        self.log(AuditEventBuilder.export_written(
            path=path,
            row_count=row_count,
            correlation_id=self.correlation_id,
        ))

    def log_export_skipped(self) -> None:
        self.log(AuditEventBuilder.export_skipped(
            correlation_id=self.correlation_id,
        ))

    def log_validation_failed(self, kind: str, message: str) -> None:
        """Log a rejected input."""
        self.log(AuditEventBuilder.validation_failed(
            kind=kind,
            message=message,
            correlation_id=self.correlation_id,
        ))

    def log_store_parse_failed(self, store: str, path: str, error_message: str) -> None:
        """Log an unreadable store document."""
        self.log(AuditEventBuilder.store_parse_failed(
            store=store,
            path=path,
            error_message=error_message,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this once per command and pass it to the AuditLogger.
    """
    return uuid4()
