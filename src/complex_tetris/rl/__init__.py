"""Agents that drive the ComplexTetris-v0 environment."""
