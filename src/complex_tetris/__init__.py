"""Falling-block puzzle whose pieces move and turn by complex-number arithmetic."""

__version__ = "0.1.0"
