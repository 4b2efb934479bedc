"""Event-driven build and release orchestrator."""

__version__ = "0.1.0"
