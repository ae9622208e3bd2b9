"""
DSL Package

Text front-end that turns architecture descriptions into GraphModel instances.
"""

from .parser import parse_c4_dsl, parse_file

__all__ = [
    "parse_c4_dsl",
    "parse_file",
]
