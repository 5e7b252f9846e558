"""Pickup: short-lived campus activity listings with friend-gated private events."""

__version__ = "0.1.0"
