"""
Booking Window Manager - admin tool for the daily order acceptance window.
"""

__version__ = "0.1.0"
