"""Shared helpers for the command-line interface."""
