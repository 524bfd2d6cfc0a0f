"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces:
- Classification strategies (heading text, direction flag overrides)
- Canonical sequence registries (the compiled-in TTC light rail table)
"""
