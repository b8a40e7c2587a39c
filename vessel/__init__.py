"""Vessel: bounded resource containers with clamped, conserving transfers."""

__version__ = "0.1.0"
