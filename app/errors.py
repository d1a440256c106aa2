"""
Error taxonomy for the plan generation pipeline.

Every error knows the HTTP status it maps to and the JSON body returned to
the caller. Anything that is not a PlanGenerationError is answered with
``internal_error_body``.
"""

from typing import Any, Dict, List


class PlanGenerationError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self) -> Dict[str, Any]:
        return {"message": self.message}


class PromptValidationError(PlanGenerationError):
    status_code = 400

    def __init__(self, message: str = "Falta el campo 'prompt'"):
        super().__init__(message)


class CatalogMatchError(PlanGenerationError):
    """Raised when the model asked for exercises that are not in the catalog."""

    status_code = 422

    def __init__(self, missing_exercises: List[str]):
        super().__init__("Algunos ejercicios solicitados no están en el catálogo")
        self.missing_exercises = list(missing_exercises)

    def body(self) -> Dict[str, Any]:
        return {"message": self.message, "missingExercises": self.missing_exercises}


class ModelEmptyResponse(PlanGenerationError):
    def __init__(self, raw: Any, message: str = "Modelo no devolvió texto"):
        super().__init__(message)
        self.raw = raw

    def body(self) -> Dict[str, Any]:
        return {"message": self.message, "raw": self.raw}


class ModelMalformedResponse(PlanGenerationError):
    def __init__(self, raw: Any, message: str = "Modelo no devolvió JSON"):
        super().__init__(message)
        self.raw = raw

    def body(self) -> Dict[str, Any]:
        return {"message": self.message, "raw": self.raw}


class PlanJsonError(ModelMalformedResponse):
    """The JSON array could not be parsed, even after the repair pass."""

    def __init__(self, raw: Any, error: str):
        super().__init__(raw, message="No se pudo interpretar el JSON del modelo")
        self.error = error

    def body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.error}


class InternalError(PlanGenerationError):
    """Wraps an unexpected failure so it is answered like any other pipeline error."""

    def __init__(self, cause: BaseException):
        super().__init__("Error interno")
        self.error = str(cause) or cause.__class__.__name__

    def body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.error}


def internal_error_body(exc: BaseException) -> Dict[str, Any]:
    return {"message": "Error interno", "error": str(exc) or exc.__class__.__name__}
