"""Escape-time math, pixel storage and histogram."""
