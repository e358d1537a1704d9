"""Tic-tac-toe engine with a configurable rule-based computer opponent."""

__version__ = "0.1.0"
