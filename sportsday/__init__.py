"""
Sports Day competition engine.

Block and playoff generation, standings and court scheduling for school
sports days.
"""

__version__ = "1.0.0"
