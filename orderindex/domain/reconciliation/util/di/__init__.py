from orderindex.domain.reconciliation.util.di.provider import ReconciliationProvider

__all__ = ["ReconciliationProvider"]
