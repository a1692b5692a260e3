"""Repair assistant API: structured repair guides from LLM replies."""

__version__ = "0.1.0"
