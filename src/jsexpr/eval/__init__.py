"""Evaluator helper modules for the jsexpr dispatch core."""

__all__ = [
    "chains",
    "common",
    "expr",
]
