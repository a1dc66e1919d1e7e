"""
pipelint - offline validation for GitHub Actions workflow files.
"""

__version__ = "0.1.0"
