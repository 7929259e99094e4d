"""Caltrain Finder: live arrival boards and nearest-station recommendations."""

__version__ = "0.1.0"
