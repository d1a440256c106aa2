from typing import Optional

SERVER_ERROR = "❌ Error del servidor. Intente nuevamente en unos momentos."

HTTP_ERROR_MESSAGES = {
    400: "❌ Datos inválidos. Verifique la información e intente nuevamente.",
    401: "❌ Sesión expirada. Inicie sesión nuevamente.",
    403: "❌ No tiene permisos para realizar esta acción.",
    413: "❌ Archivo demasiado grande. Reduzca el tamaño e intente nuevamente.",
    422: "❌ Validación fallida. Complete todos los campos requeridos.",
    429: "❌ Demasiadas solicitudes. Espere un momento e intente nuevamente.",
    500: SERVER_ERROR,
    502: SERVER_ERROR,
    503: SERVER_ERROR,
    504: SERVER_ERROR,
}

CONNECTION_ERROR = "❌ Error de conexión. Verifique su internet e intente nuevamente."
GENERIC_ERROR = "❌ Ha ocurrido un error inesperado. Intente nuevamente."


def map_http_error(status: Optional[int]) -> str:
    """User-facing message for an HTTP status; None means no response at all."""
    if status is None:
        return CONNECTION_ERROR
    return HTTP_ERROR_MESSAGES.get(status, f"❌ Error ({status}). Intente nuevamente.")


def map_generic_error(message: Optional[str] = None) -> str:
    if message:
        return f"❌ {message}"
    return GENERIC_ERROR
