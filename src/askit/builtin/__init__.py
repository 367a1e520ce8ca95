"""Builtin request handlers."""
