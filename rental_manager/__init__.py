"""
Rental Manager API: properties, rooms and tenant leads over REST.
"""

__version__ = "1.0.0"
