"""Reconcile remote asset inventories against local backups."""

from __future__ import annotations

__version__ = "0.1.0"
