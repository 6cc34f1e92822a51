"""
Applitools Eyes integration for TeamCity builds.
"""

__version__ = "1.3.0"
