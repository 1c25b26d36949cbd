"""
Trip-duration analysis for yellow-cab trip records.
"""

__version__ = "1.0.0"
