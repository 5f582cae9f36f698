"""Agenda Turnos: appointment scheduling and availability engine."""
