"""Reconciliation of desired-state records against the remote API."""

from __future__ import annotations

from .engine import ReconciliationEngine
from .state import ResourceInstance, ResourceState

__all__ = ["ReconciliationEngine", "ResourceInstance", "ResourceState"]
