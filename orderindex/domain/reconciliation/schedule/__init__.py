"""Reconciliation schedules."""

from orderindex.domain.reconciliation.schedule.sweep import ReconciliationSweep

__all__ = ["ReconciliationSweep"]
