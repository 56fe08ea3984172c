"""State/store layer.

This package is the single source of truth for per-channel accounts. Channel
lifecycle events create and delete records here; acknowledgments overwrite
them. Nothing else holds a mutable account across events.
"""
