"""Local/remote reconciliation for users, recipes and menu plans."""

from mercado.services.sync.reconciler import LoginSync, Stream, SyncReconciler, SyncResult, SyncState

__all__ = ["LoginSync", "Stream", "SyncReconciler", "SyncResult", "SyncState"]
