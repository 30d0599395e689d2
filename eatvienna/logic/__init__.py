"""Core business logic layer.

Subpackages:
- ingredients: recipe ingredient extraction, quantity aggregation, packaging
- reporting: display formatting and category grouping shared by the API, PDF and Excel exports
- reorder: building Nachbestellung items
"""
__all__ = ["ingredients", "reporting", "reorder"]
