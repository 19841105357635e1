"""
polyarea CLI - Command-line interface for Monte Carlo polygon area estimation.

Usage:
    polyarea polygon.txt 4 1000000
    polyarea polygon.txt 8 1000000 --seed 42 --fit-domain
"""

from .loader import load_polygon, parse_vertices, IOFailure

__all__ = [
    "load_polygon",
    "parse_vertices",
    "IOFailure",
]

__version__ = "1.0.0"
