"""
Database module - async MongoDB connection via Motor.
"""

from fraudlr.database.mongodb import MongoDB

__all__ = ["MongoDB"]
