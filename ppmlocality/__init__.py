"""Rotation and flipping of PNM images over plain and cache-blocked 2D arrays, with CPU timing."""

__version__ = "0.1.0"