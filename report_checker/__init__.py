"""Reconcile health-insurance report files against a client roster."""

__version__ = "1.0.0"
