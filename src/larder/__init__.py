"""
Larder shopping-list consolidation package.

The package turns recipe ingredients into department-grouped shopping items, merges them
into persisted shopping lists, and exposes the pipeline through an HTTP API and a CLI.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
