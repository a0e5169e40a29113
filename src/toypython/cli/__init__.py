"""
toypython Command-Line Interface
================================

This package provides the ``toypyc`` command-line translator, implemented
as a Click application.
"""

__all__ = ["toypyc"]
