"""
Centralized Schema Definitions
============================

This module provides centralized schema definitions for the GTFS calendar tables.
"""

from .schedule import *

__version__ = "1.0.0"
