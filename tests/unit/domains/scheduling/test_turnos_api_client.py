# ============================================================================
# Tests for TurnosApiClient
# ============================================================================
"""Unit tests for the turnos REST client using httpx.MockTransport."""

import json
import logging
from collections.abc import Callable

import httpx
import pytest

from agenda_turnos.config.settings import Settings
from agenda_turnos.core.shared import JSONFormatter
from agenda_turnos.domains.scheduling.application.services import create_agenda_service
from agenda_turnos.domains.scheduling.infrastructure.external.turnos_api import (
    CircuitBreakerConfig,
    EndpointRegistry,
    TurnosApiClient,
)

BASE_URL = "http://turnos.test"


class Recorder:
    """MockTransport handler that records requests and answers with ``respond``."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._respond = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> TurnosApiClient:
    kwargs.setdefault("token_provider", lambda: "session-token")
    return TurnosApiClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestRequests:
    """Tests for how requests are built."""

    @pytest.mark.asyncio
    async def test_get_with_query_and_bearer(self) -> None:
        """Should send the email as query param and the token as Bearer header."""
        recorder = Recorder(lambda r: httpx.Response(200, json={"disponibilidad": []}))
        client = _client(recorder)

        result = await client.obtener_disponibilidad("medico@mail.com")

        request = recorder.requests[0]
        assert result.success
        assert result.data == {"disponibilidad": []}
        assert request.method == "GET"
        assert request.url.path == "/obtenerDisponibilidadProfesional"
        assert request.url.params["email"] == "medico@mail.com"
        assert request.headers["Authorization"] == "Bearer session-token"
        await client.close()

    @pytest.mark.asyncio
    async def test_post_body_with_token(self) -> None:
        """Should map arguments to backend field names and include the token."""
        recorder = Recorder(lambda r: httpx.Response(201, json={"turnoid": 12}))
        client = _client(recorder)

        result = await client.crear_turno("medico@mail.com", "2025-11-20", "09:00", "10:00")

        assert result.data == {"turnoid": 12}
        assert recorder.requests[0].url.path == "/nuevoTurno"
        assert recorder.body() == {
            "token": "session-token",
            "emailProfesional": "medico@mail.com",
            "fecha": "2025-11-20",
            "hora_inicio": "09:00",
            "hora_fin": "10:00",
            "estado": "confirmado",
            "tipo": "consulta",
        }

    @pytest.mark.asyncio
    async def test_express_token_goes_in_body(self) -> None:
        """Should send the express token, not the session token, when accepting."""
        recorder = Recorder(lambda r: httpx.Response(200, json={"message": "ok"}))
        client = _client(recorder)

        await client.aceptar_turno_express("7", "2025-11-20", "09:00", "10:00", token="express-token")

        assert recorder.requests[0].method == "PUT"
        assert recorder.body() == {
            "token": "express-token",
            "turnoId": "7",
            "inicio": "09:00",
            "fin": "10:00",
            "fecha": "2025-11-20",
        }
        assert recorder.requests[0].headers["Authorization"] == "Bearer session-token"
        await client.close()

    @pytest.mark.asyncio
    async def test_async_token_provider(self) -> None:
        """Should await an async token provider."""
        recorder = Recorder(lambda r: httpx.Response(200, json={"turnos": []}))

        async def token() -> str:
            return "async-token"

        client = _client(recorder, token_provider=token)
        await client.obtener_turnos_paciente()

        assert recorder.requests[0].headers["Authorization"] == "Bearer async-token"

    @pytest.mark.asyncio
    async def test_no_token_no_header(self) -> None:
        """Should omit the Authorization header without a token."""
        recorder = Recorder(lambda r: httpx.Response(200, json=[]))
        client = _client(recorder, token_provider=None)

        result = await client.obtener_pagos_profesional()

        assert "Authorization" not in recorder.requests[0].headers
        assert result.data == []

    @pytest.mark.asyncio
    async def test_custom_registry(self) -> None:
        """Should use the paths of an injected registry."""
        registry = EndpointRegistry().register("obtener_turnos_paciente", "get", "/v2/turnos")
        recorder = Recorder(lambda r: httpx.Response(200, json={"turnos": []}))
        client = _client(recorder, endpoint_registry=registry)

        await client.obtener_turnos_paciente()

        assert recorder.requests[0].url.path == "/v2/turnos"


class TestEndpointRegistry:
    """Tests for request body building."""

    def test_argument_token_does_not_clash_with_session_token(self) -> None:
        """Should keep an argument named token apart from the session token."""
        config = EndpointRegistry().register("x", "put", "/x", body={"token": "token"}).get("x")

        assert config.build_body({"token": "express-token"}, session_token="session-token") == {
            "token": "express-token"
        }

    def test_session_token_in_body(self) -> None:
        """Should add the session token when the endpoint reads it from the body."""
        config = (
            EndpointRegistry()
            .register("x", "put", "/x", body={"turno_id": "turnoId"}, include_token_in_body=True)
            .get("x")
        )

        assert config.build_body({"turno_id": "7"}, session_token="session-token") == {
            "token": "session-token",
            "turnoId": "7",
        }

    def test_no_body(self) -> None:
        """Should return None for endpoints without a body."""
        config = EndpointRegistry().register("x", "get", "/x", query={"email": "email"}).get("x")

        assert config.build_body({"email": "a@b.com"}, session_token="session-token") is None


class TestResponseBodies:
    """Tests for body parsing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response,expected",
        [
            (httpx.Response(204), None),
            (httpx.Response(200, text="Turno cancelado"), {"message": "Turno cancelado"}),
            (httpx.Response(200, json=True), {"value": True}),
        ],
    )
    async def test_non_object_bodies(self, response: httpx.Response, expected) -> None:
        """Should normalize empty, text and scalar bodies."""
        client = _client(lambda r: response)

        result = await client.cancelar_turno("7")

        assert result.success
        assert result.data == expected


class TestErrorMapping:
    """Tests for HTTP and transport error mapping."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,code",
        [(409, "SLOT_UNAVAILABLE"), (404, "NOT_FOUND"), (400, "REMOTE_REJECTED"), (401, "REMOTE_REJECTED")],
    )
    async def test_client_errors(self, status: int, code: str) -> None:
        """Should map 4xx statuses and keep the backend message."""
        client = _client(lambda r: httpx.Response(status, json={"message": "Mensaje del backend"}))

        result = await client.crear_turno("medico@mail.com", "2025-11-20", "09:00", "10:00")

        assert result.success is False
        assert result.error_code == code
        assert result.error_message == "Mensaje del backend"

    @pytest.mark.asyncio
    async def test_fallback_message(self) -> None:
        """Should use a status message when the backend sends none."""
        client = _client(lambda r: httpx.Response(401))

        result = await client.obtener_turnos_paciente()

        assert result.error_message.startswith("Credenciales inválidas")

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        """Should report 5xx as REMOTE_UNAVAILABLE."""
        client = _client(lambda r: httpx.Response(500))

        result = await client.obtener_turnos_paciente()

        assert result.error_code == "REMOTE_UNAVAILABLE"
        assert result.error_message == "Error interno del servidor. Intenta más tarde."

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        """Should report transport errors as REMOTE_UNAVAILABLE."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(refuse)

        result = await client.obtener_turnos_paciente()

        assert result.error_code == "REMOTE_UNAVAILABLE"
        assert result.error_message == "Error de conexión. Verifica la URL del servidor."

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Should report timeouts as REMOTE_UNAVAILABLE."""

        def slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client(slow, timeout=5.0)

        result = await client.obtener_turnos_paciente()

        assert result.error_code == "REMOTE_UNAVAILABLE"
        assert "5s" in result.error_message


class TestCircuitBreakerIntegration:
    """Tests for the breaker wrapped around the client."""

    @pytest.mark.asyncio
    async def test_opens_after_failures(self) -> None:
        """Should fail fast without reaching the backend once open."""
        recorder = Recorder(lambda r: httpx.Response(503))
        client = _client(recorder, circuit_breaker_config=CircuitBreakerConfig(failure_threshold=2))

        await client.obtener_turnos_paciente()
        await client.obtener_turnos_paciente()
        result = await client.obtener_turnos_paciente()

        assert len(recorder.requests) == 2
        assert client.circuit_breaker.is_open
        assert result.error_code == "REMOTE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_business_errors_do_not_trip(self) -> None:
        """Should not count 4xx responses as failures."""
        client = _client(
            lambda r: httpx.Response(409, json={"message": "ocupado"}),
            circuit_breaker_config=CircuitBreakerConfig(failure_threshold=1),
        )

        await client.crear_turno("medico@mail.com", "2025-11-20", "09:00", "10:00")
        await client.crear_turno("medico@mail.com", "2025-11-20", "09:00", "10:00")

        assert client.circuit_breaker.is_closed


class TestCreateAgendaService:
    """Tests for the service factory."""

    @pytest.mark.asyncio
    async def test_builds_client_from_settings(self) -> None:
        """Should configure the REST client from settings."""
        settings = Settings(
            _env_file=None,
            TURNOS_API_BASE_URL="http://turnos.test/api/",
            TURNOS_API_TIMEOUT=7.5,
            CIRCUIT_BREAKER_FAILURE_THRESHOLD=3,
        )

        service = create_agenda_service(settings, token_provider=lambda: "session-token")

        client = service._backend
        assert isinstance(client, TurnosApiClient)
        assert client.base_url == "http://turnos.test/api"
        assert client.timeout == 7.5
        assert client.circuit_breaker._config.failure_threshold == 3
        await service.close()

    def test_setup_logging_applies_settings(self) -> None:
        """Should configure the root logger when asked to."""
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        try:
            create_agenda_service(
                Settings(_env_file=None, LOG_LEVEL="WARNING", LOG_FORMAT="json"),
                setup_logging=True,
            )
            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
