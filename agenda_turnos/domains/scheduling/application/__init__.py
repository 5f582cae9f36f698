# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Application layer for the scheduling domain.
# ============================================================================
"""Scheduling Application Layer.

Ports, DTOs, use cases and the AgendaService facade.
"""
