"""Core business logic layer.

Subpackages:
- recommendations: draft derivation, draft generation, saving, and the
  date-cursor view controller for the daily lunch/dinner editor
"""
__all__ = ["recommendations"]
