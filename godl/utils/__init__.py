"""Utility modules for godl."""
