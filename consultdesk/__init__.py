"""Consulting practice billing and invoice aggregation service."""

__version__ = "1.0.0"
