"""Core run orchestration, configuration and reporting."""
