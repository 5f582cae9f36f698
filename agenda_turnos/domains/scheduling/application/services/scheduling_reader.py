# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Cached reads shared by the scheduling use cases.
# ============================================================================
"""Scheduling Reader.

Fetches availability, appointments and payments through the ports, maps them
with the wire mapper and caches them. Failed responses raise domain
exceptions carrying the client's error code and are never cached.
"""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, RemoteUnavailableException

from ...domain.entities import Appointment, PaymentRecord, WeeklyAvailability
from ...domain.services import NormalizationReport
from ...domain.value_objects import PartyRole
from ..ports import ExternalResponse
from ..utils import TurnosWireMapper
from .scheduling_cache import CacheRead, SchedulingCache

if TYPE_CHECKING:
    from ..ports import IAppointmentStore, IAvailabilityStore, IPaymentStore

logger = logging.getLogger(__name__)


def ensure_success(response: ExternalResponse, default_code: str, default_message: str) -> ExternalResponse:
    """Raise a DomainException with the response's error code when it failed."""
    if response.success:
        return response
    if response.error_code == "REMOTE_UNAVAILABLE":
        raise RemoteUnavailableException("turnos_api", response.error_message)
    raise DomainException(
        response.error_message or default_message,
        response.error_code or default_code,
    )


class SchedulingReader:
    """Cached read side of the scheduling ports."""

    def __init__(
        self,
        availability_store: "IAvailabilityStore",
        appointment_store: "IAppointmentStore",
        payment_store: "IPaymentStore",
        cache: SchedulingCache | None = None,
        currency: str = "ARS",
    ) -> None:
        self._availability = availability_store
        self._appointments = appointment_store
        self._payments = payment_store
        self._cache = cache or SchedulingCache()
        self._currency = currency

    @property
    def cache(self) -> SchedulingCache:
        return self._cache

    async def availability(self, professional_ref: str) -> CacheRead[tuple[WeeklyAvailability, NormalizationReport]]:
        async def load() -> tuple[WeeklyAvailability, NormalizationReport]:
            response = ensure_success(
                await self._availability.obtener_disponibilidad(professional_ref),
                "AVAILABILITY_ERROR",
                "Error al obtener la disponibilidad del profesional",
            )
            report = NormalizationReport()
            availability = TurnosWireMapper.normalize_availability_rows(response.data, professional_ref, report)
            logger.debug(f"Loaded availability of {professional_ref}: {availability.block_count} blocks")
            return availability, report

        return await self._cache.fetch(self._cache.availability_key(professional_ref), load)

    async def appointments(self, party: PartyRole) -> CacheRead[list[Appointment]]:
        async def load() -> list[Appointment]:
            if party == PartyRole.PATIENT:
                response = await self._appointments.obtener_turnos_paciente()
            else:
                response = await self._appointments.obtener_turnos_profesional()
            ensure_success(response, "APPOINTMENTS_ERROR", "Error al obtener los turnos")
            return TurnosWireMapper.appointments(response.data, self._currency)

        return await self._cache.fetch(self._cache.appointments_key(party), load)

    async def payments(self, party: PartyRole) -> CacheRead[list[PaymentRecord]]:
        async def load() -> list[PaymentRecord]:
            if party == PartyRole.PATIENT:
                response = await self._payments.obtener_pagos_paciente()
            else:
                response = await self._payments.obtener_pagos_profesional()
            ensure_success(response, "PAYMENTS_ERROR", "Error al obtener los pagos")
            return TurnosWireMapper.payments(response.data, self._currency)

        return await self._cache.fetch(self._cache.payments_key(party), load)

    async def find_appointment(self, party: PartyRole, appointment_id: str) -> Appointment | None:
        read = await self.appointments(party)
        target = str(appointment_id)
        for appointment in read.value:
            if str(appointment.id) == target:
                return appointment
        return None
