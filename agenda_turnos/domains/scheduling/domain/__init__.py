"""Scheduling domain layer: value objects, entities and domain services."""
