"""Kinetic Thinking Styles text analyzer."""

__version__ = "0.1.0"
