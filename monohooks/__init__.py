"""
Monohooks

Git hooks for repositories holding several independently versioned packages.
Each hook event discovers the packages, reads their hook configuration, and
runs their task commands when the changed files concern them.
"""

__version__ = "1.0.0"
