"""Talentgate — tier and verification rules for a freelance marketplace."""

__version__ = "1.0.0"
