# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: REST endpoint registry for OCP compliance.
# ============================================================================
"""Turnos API Endpoint Registry.

Extensible registry mapping client operations to HTTP endpoints. New
endpoints (or a backend with different paths) are configured without
modifying the client class (OCP).

Usage:
    registry = EndpointRegistry()
    registry.register("cancelar_turno", "PUT", "/cancelarTurno", body={"turno_id": "turnoId"})
    config = registry.get("cancelar_turno")
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class EndpointConfig:
    """Configuration for a REST endpoint.

    Attributes:
        http_method: HTTP verb.
        path: Path relative to the base URL.
        query: Argument name -> query parameter name.
        body: Argument name -> JSON body field name.
        include_token_in_body: Also send the auth token as ``token`` in the
            body (some backend routes read it from there instead of the header).
    """

    http_method: str
    path: str
    query: dict[str, str] = field(default_factory=dict)
    body: dict[str, str] = field(default_factory=dict)
    include_token_in_body: bool = False

    def build_query(self, **kwargs: Any) -> dict[str, Any] | None:
        if not self.query:
            return None
        return {wire: kwargs[arg] for arg, wire in self.query.items() if kwargs.get(arg) is not None}

    def build_body(self, arguments: dict[str, Any], session_token: str | None = None) -> dict[str, Any] | None:
        """Build the JSON body; ``None`` when the endpoint sends no body.

        ``arguments`` may carry its own ``token`` (express token), which is
        unrelated to the session token.
        """
        if not self.body and not self.include_token_in_body:
            return None

        payload: dict[str, Any] = {}
        if self.include_token_in_body:
            payload["token"] = session_token
        for arg, wire in self.body.items():
            if arg in arguments:
                payload[wire] = arguments[arg]
        return payload


class EndpointRegistry:
    """Registry of endpoint configurations."""

    def __init__(self) -> None:
        self._endpoints: dict[str, EndpointConfig] = {}

    def register(
        self,
        name: str,
        http_method: str,
        path: str,
        query: dict[str, str] | None = None,
        body: dict[str, str] | None = None,
        include_token_in_body: bool = False,
    ) -> "EndpointRegistry":
        """Register an endpoint.

        Returns:
            Self for method chaining.
        """
        self._endpoints[name] = EndpointConfig(
            http_method=http_method.upper(),
            path=path,
            query=query or {},
            body=body or {},
            include_token_in_body=include_token_in_body,
        )
        return self

    def get(self, name: str) -> EndpointConfig:
        """Get endpoint configuration.

        Raises:
            KeyError: If endpoint not registered.
        """
        if name not in self._endpoints:
            raise KeyError(f"Endpoint '{name}' not registered in registry")
        return self._endpoints[name]

    def has(self, name: str) -> bool:
        return name in self._endpoints

    def list_endpoints(self) -> list[str]:
        return list(self._endpoints.keys())


def create_default_registry() -> EndpointRegistry:
    """Create registry with the turnos backend endpoints."""
    registry = EndpointRegistry()

    # Availability
    registry.register(
        "obtener_disponibilidad", "GET", "/obtenerDisponibilidadProfesional", query={"email_profesional": "email"}
    )
    registry.register(
        "establecer_disponibilidad",
        "POST",
        "/establecerDisponibilidadProfesional",
        body={"horarios": "horarios"},
        include_token_in_body=True,
    )

    # Appointments
    registry.register("obtener_turnos_paciente", "GET", "/buscarTurno")
    registry.register("obtener_turnos_profesional", "GET", "/obtenerMisTurnos")
    registry.register(
        "crear_turno",
        "POST",
        "/nuevoTurno",
        body={
            "email_profesional": "emailProfesional",
            "fecha": "fecha",
            "hora_inicio": "hora_inicio",
            "hora_fin": "hora_fin",
            "estado": "estado",
            "tipo": "tipo",
        },
        include_token_in_body=True,
    )
    registry.register(
        "cancelar_turno", "PUT", "/cancelarTurno", body={"turno_id": "turnoId"}, include_token_in_body=True
    )
    registry.register("marcar_turno_realizado", "PUT", "/marcarTurnoRealizado", body={"turno_id": "turnoId"})

    # Express
    registry.register(
        "solicitar_turno_express", "POST", "/solicitarNuevoTurnoExpress", body={"email_profesional": "emailProfesional"}
    )
    registry.register(
        "aceptar_turno_express",
        "PUT",
        "/aceptarTurnoExpress",
        # ``token`` is the express token of the turno, not the session token
        body={"token": "token", "turno_id": "turnoId", "inicio": "inicio", "fin": "fin", "fecha": "fecha"},
    )
    registry.register("confirmar_turno_express", "PUT", "/confirmarTurnoExpress", body={"turno_id": "turnoId"})

    # Payments
    registry.register("obtener_pagos_paciente", "GET", "/VerPagos")
    registry.register("obtener_pagos_profesional", "GET", "/VerPagosProfesional")
    registry.register("pagar_turno", "PUT", "/PagarTurno", body={"turno_id": "turnoId"})

    return registry


# Singleton default registry
_default_registry: EndpointRegistry | None = None


def get_default_registry() -> EndpointRegistry:
    """Get the default endpoint registry (singleton)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry
