"""Shared utilities for logging and fingerprinting."""
