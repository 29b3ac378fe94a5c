"""
cmsmacros — macro data-access service for a content-management system.
"""

__version__ = "0.1.0"
