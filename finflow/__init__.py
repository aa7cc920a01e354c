"""
FinFlow - personal finance records backend.
"""

__version__ = "0.1.0"
