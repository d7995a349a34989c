"""Aspas web surface."""
