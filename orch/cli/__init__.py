"""Command line host for the orchestrator."""
