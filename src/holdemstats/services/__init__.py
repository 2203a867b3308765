# src/holdemstats/services/__init__.py

"""Derivations built on top of loaded statistics and hands."""
