"""Kernel – errors, time and identifiers shared by every layer."""
