"""Utility helpers for bn-data-editor."""
