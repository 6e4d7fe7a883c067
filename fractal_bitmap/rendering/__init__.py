"""Tone mapping and bitmap export."""
