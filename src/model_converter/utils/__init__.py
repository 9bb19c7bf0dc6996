"""Shared helpers for logging and payload encoding."""
