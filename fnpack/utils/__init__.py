"""Utility helpers for fnpack."""
