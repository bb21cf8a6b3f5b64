"""
Top-level package for vc_release_helper.

This package exposes the ``version-control`` and ``smart-commit`` CLI
entry points via the ``vc_release_helper.cli`` module. The heuristics
themselves live in :mod:`vc_release_helper.analysis`.
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
