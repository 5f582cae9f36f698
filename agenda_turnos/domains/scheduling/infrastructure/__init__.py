# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: Infrastructure layer for the Scheduling domain.
# ============================================================================
"""Scheduling Infrastructure Layer.

Contains the REST client for the turnos backend.
"""
