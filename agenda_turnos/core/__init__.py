"""
Core Layer

Domain building blocks and shared utilities reused by every scheduling module.
"""
