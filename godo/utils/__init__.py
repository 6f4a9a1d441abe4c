"""Utility helpers for godo."""
