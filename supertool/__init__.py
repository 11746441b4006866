"""Maintenance helpers: zip archives, update discovery, time setting, dialog and keypad logic."""

__version__ = "1.0.2"