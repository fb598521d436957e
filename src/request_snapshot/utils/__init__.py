"""Leaf utilities: field access, serialization, headers, durations and URLs."""
