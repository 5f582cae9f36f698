"""
Domains

Bounded contexts of the engine. Currently only ``scheduling``.
"""
