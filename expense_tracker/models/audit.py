"""
Audit Models for the Expense Tracker

Every command that changes or reads the ledger produces audit events.
This provides:
1. Traceability of every mutation (add, delete, budget change)
2. A record of budget overruns
3. Debugging information when a stored document is unreadable

Audit events are write-only: they are emitted, never edited.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_NOT_FOUND = "expense_not_found"

    # Budget
    BUDGET_SET = "budget_set"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Reads
    EXPENSES_LISTED = "expenses_listed"
    SUMMARY_COMPUTED = "summary_computed"

    # Export
    EXPORT_WRITTEN = "export_written"
    EXPORT_SKIPPED = "export_skipped"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    STORE_PARSE_FAILED = "store_parse_failed"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'ledger')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Expense id the event relates to, if any"
    )

    # Correlation - one id per CLI invocation
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one command"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(
            expense_id=3,
            category="food",
            amount="10.00",
            correlation_id=correlation_id,
        )
    """

    @staticmethod
    def expense_added(
        expense_id: int,
        category: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} added ({category})",
            details={"category": category, "amount": amount},
        )

    @staticmethod
    def budget_exceeded(
        month: int,
        monthly_budget: str,
        projected_total: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EXCEEDED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Spending for month {month} exceeds budget",
            details={
                "month": month,
                "monthly_budget": monthly_budget,
                "projected_total": projected_total,
            },
        )

    @staticmethod
    def expense_deleted(
        expense_id: int,
        renumbered_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} deleted",
            details={"renumbered_count": renumbered_count},
        )

    @staticmethod
    def expense_not_found(
        expense_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"No expense with id {expense_id}",
        )

    @staticmethod
    def budget_set(
        monthly_budget: str,
        previous_budget: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Monthly budget set to {monthly_budget}",
            details={
                "monthly_budget": monthly_budget,
                "previous_budget": previous_budget,
            },
        )

    @staticmethod
    def expenses_listed(
        result_count: int,
        category: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LISTED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Listed {result_count} expense(s)",
            details={"category": category, "result_count": result_count},
        )

    @staticmethod
    def summary_computed(
        month: int,
        total: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_COMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Summary for month {month}: {total}",
            details={"month": month, "total": total},
        )

    @staticmethod
    def export_written(
        path: str,
        row_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_WRITTEN,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Exported {row_count} expense(s)",
            details={"path": path, "row_count": row_count},
        )

    @staticmethod
    def export_skipped(
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_SKIPPED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="Nothing to export, ledger is empty",
        )

    @staticmethod
    def validation_failed(
        kind: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Validation failed: {kind}",
            details={"kind": kind},
            error_message=message,
        )

    @staticmethod
    def store_parse_failed(
        store: str,
        path: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_PARSE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type=store,
            description=f"Could not parse the {store} document, using an empty default",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
