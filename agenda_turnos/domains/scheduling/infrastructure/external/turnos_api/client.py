# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: Turnos REST API client implementation.
# ============================================================================
"""Turnos API Client.

Async httpx client for the turnos backend. Implements every scheduling port
(ITurnosBackend) and uses EndpointRegistry for OCP-compliant endpoint
configuration.

Error mapping (the backend ``message`` always wins when present):
- 409 -> SLOT_UNAVAILABLE
- 404 -> NOT_FOUND
- other 4xx -> REMOTE_REJECTED
- 5xx, timeouts, transport errors, open circuit -> REMOTE_UNAVAILABLE
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from agenda_turnos.core.shared.logger import get_client_logger

from ....application.ports import ExternalResponse, ITurnosBackend
from .endpoint_registry import EndpointConfig, EndpointRegistry, get_default_registry
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitOpenError

logger = get_client_logger("turnos_api")

TokenProvider = Callable[[], "str | None | Awaitable[str | None]"]

CONNECTION_ERROR_MESSAGE = "Error de conexión. Verifica la URL del servidor."
SERVER_ERROR_MESSAGE = "Error interno del servidor. Intenta más tarde."
UNAVAILABLE_MESSAGE = "El servicio no está disponible temporalmente. Intente nuevamente."

_STATUS_MESSAGES = {
    401: "Credenciales inválidas. Verifica tu email y contraseña.",
    404: "Endpoint no encontrado. Verifica la configuración del servidor.",
}


def _backend_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return None


def _error_code(status_code: int) -> str:
    if status_code == 409:
        return "SLOT_UNAVAILABLE"
    if status_code == 404:
        return "NOT_FOUND"
    if status_code >= 500:
        return "REMOTE_UNAVAILABLE"
    return "REMOTE_REJECTED"


def _error_message(response: httpx.Response) -> str:
    message = _backend_message(response)
    if message:
        return message
    if response.status_code >= 500:
        return SERVER_ERROR_MESSAGE
    return _STATUS_MESSAGES.get(response.status_code, f"Error {response.status_code} del servidor")


class TurnosApiClient(ITurnosBackend):
    """Async REST client for the turnos backend.

    The session token is read from ``token_provider`` on every request (it may
    be a plain or an async callable) and sent as a Bearer header.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        timeout: float = 30.0,
        endpoint_registry: EndpointRegistry | None = None,
        circuit_breaker_config: CircuitBreakerConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize REST client.

        Args:
            base_url: Backend base URL.
            token_provider: Returns the current session token (sync or async).
            timeout: Request timeout in seconds.
            endpoint_registry: Optional custom endpoint registry.
            circuit_breaker_config: Optional circuit breaker configuration.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._token_provider = token_provider
        self._registry = endpoint_registry or get_default_registry()
        self._circuit_breaker = CircuitBreaker(circuit_breaker_config, name="turnos_api")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        return self._circuit_breaker

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get_token(self) -> str | None:
        if self._token_provider is None:
            return None
        token = self._token_provider()
        if inspect.isawaitable(token):
            token = await token
        return token

    async def _call(self, endpoint_name: str, **kwargs: Any) -> ExternalResponse:
        """Call a registered endpoint through the circuit breaker.

        Args:
            endpoint_name: Registered endpoint name.
            **kwargs: Endpoint arguments.

        Returns:
            ExternalResponse with result or error.
        """
        config = self._registry.get(endpoint_name)
        token = await self._get_token()

        try:
            return await self._circuit_breaker.call(self._execute_request, config, token, kwargs)
        except CircuitOpenError as e:
            logger.warning(f"Circuit breaker open for {config.path}: {e}")
            return ExternalResponse.error("REMOTE_UNAVAILABLE", UNAVAILABLE_MESSAGE)
        except httpx.HTTPStatusError as e:
            return ExternalResponse.error("REMOTE_UNAVAILABLE", _error_message(e.response))
        except httpx.TimeoutException:
            return ExternalResponse.error("REMOTE_UNAVAILABLE", f"Timeout de {self.timeout:.0f}s esperando al servidor")
        except httpx.RequestError:
            return ExternalResponse.error("REMOTE_UNAVAILABLE", CONNECTION_ERROR_MESSAGE)

    async def _execute_request(
        self,
        config: EndpointConfig,
        token: str | None,
        arguments: dict[str, Any],
    ) -> ExternalResponse:
        """Execute the actual HTTP request.

        Raises:
            httpx.HTTPStatusError: On 5xx (for circuit breaker).
            httpx.RequestError: On transport errors (for circuit breaker).
        """
        client = await self._get_client()
        headers = {"Authorization": f"Bearer {token}"} if token else {}

        try:
            response = await client.request(
                config.http_method,
                config.path,
                params=config.build_query(**arguments),
                json=config.build_body(arguments, session_token=token),
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.error(f"Request error calling {config.http_method} {config.path}: {e}")
            # Re-raise to trigger circuit breaker
            raise

        if response.status_code >= 500:
            logger.error(f"HTTP error calling {config.path}: {response.status_code}")
            # Re-raise to trigger circuit breaker
            response.raise_for_status()

        if response.is_error:
            code = _error_code(response.status_code)
            message = _error_message(response)
            logger.warning(f"{config.http_method} {config.path} rejected ({response.status_code}): {message}")
            return ExternalResponse.error(code, message)

        logger.debug(f"{config.http_method} {config.path} -> {response.status_code}")
        return ExternalResponse.ok(self._parse_body(response))

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict[str, Any] | list[Any] | None:
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError:
            return {"message": response.text}
        if isinstance(payload, (dict, list)):
            return payload
        return {"value": payload}

    # =========================================================================
    # IAvailabilityStore implementation
    # =========================================================================

    async def obtener_disponibilidad(self, email_profesional: str) -> ExternalResponse:
        return await self._call("obtener_disponibilidad", email_profesional=email_profesional)

    async def establecer_disponibilidad(self, horarios: dict[str, list[dict[str, str]]]) -> ExternalResponse:
        return await self._call("establecer_disponibilidad", horarios=horarios)

    # =========================================================================
    # IAppointmentStore implementation
    # =========================================================================

    async def obtener_turnos_paciente(self) -> ExternalResponse:
        return await self._call("obtener_turnos_paciente")

    async def obtener_turnos_profesional(self) -> ExternalResponse:
        return await self._call("obtener_turnos_profesional")

    async def crear_turno(
        self,
        email_profesional: str,
        fecha: str,
        hora_inicio: str,
        hora_fin: str,
        estado: str = "confirmado",
        tipo: str = "consulta",
    ) -> ExternalResponse:
        return await self._call(
            "crear_turno",
            email_profesional=email_profesional,
            fecha=fecha,
            hora_inicio=hora_inicio,
            hora_fin=hora_fin,
            estado=estado,
            tipo=tipo,
        )

    async def cancelar_turno(self, turno_id: str) -> ExternalResponse:
        return await self._call("cancelar_turno", turno_id=turno_id)

    async def marcar_turno_realizado(self, turno_id: str) -> ExternalResponse:
        return await self._call("marcar_turno_realizado", turno_id=turno_id)

    # =========================================================================
    # IExpressNegotiator implementation
    # =========================================================================

    async def solicitar_turno_express(self, email_profesional: str) -> ExternalResponse:
        return await self._call("solicitar_turno_express", email_profesional=email_profesional)

    async def aceptar_turno_express(
        self,
        turno_id: str,
        fecha: str,
        inicio: str,
        fin: str,
        token: str | None = None,
    ) -> ExternalResponse:
        return await self._call(
            "aceptar_turno_express",
            turno_id=turno_id,
            fecha=fecha,
            inicio=inicio,
            fin=fin,
            token=token,
        )

    async def confirmar_turno_express(self, turno_id: str) -> ExternalResponse:
        return await self._call("confirmar_turno_express", turno_id=turno_id)

    # =========================================================================
    # IPaymentStore implementation
    # =========================================================================

    async def obtener_pagos_paciente(self) -> ExternalResponse:
        return await self._call("obtener_pagos_paciente")

    async def obtener_pagos_profesional(self) -> ExternalResponse:
        return await self._call("obtener_pagos_profesional")

    async def pagar_turno(self, turno_id: str) -> ExternalResponse:
        return await self._call("pagar_turno", turno_id=turno_id)
