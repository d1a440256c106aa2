import pytest

from services.feedback import (
    CONNECTION_ERROR,
    GENERIC_ERROR,
    SERVER_ERROR,
    map_generic_error,
    map_http_error,
)


class TestMapHttpError:
    def test_known_statuses(self) -> None:
        assert map_http_error(400).startswith("❌ Datos inválidos")
        assert map_http_error(401) == "❌ Sesión expirada. Inicie sesión nuevamente."
        assert map_http_error(422) == "❌ Validación fallida. Complete todos los campos requeridos."
        assert map_http_error(429).startswith("❌ Demasiadas solicitudes")

    @pytest.mark.parametrize("status", [500, 502, 503, 504])
    def test_server_errors(self, status) -> None:
        assert map_http_error(status) == SERVER_ERROR

    def test_unknown_status(self) -> None:
        assert map_http_error(418) == "❌ Error (418). Intente nuevamente."

    def test_no_response(self) -> None:
        assert map_http_error(None) == CONNECTION_ERROR


class TestMapGenericError:
    def test_message(self) -> None:
        assert map_generic_error("Modelo no devolvió JSON") == "❌ Modelo no devolvió JSON"

    def test_default(self) -> None:
        assert map_generic_error() == GENERIC_ERROR
        assert map_generic_error("") == GENERIC_ERROR
