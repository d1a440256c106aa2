from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schema import LegacySession, PlanModel, Session


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    general_notes: Optional[str] = Field(default=None, alias="generalNotes")


class PlanGenerated(PlanModel):
    plan: List[Session]
    plan_legacy: List[LegacySession]
    general_notes: Optional[str]


class MissingExercisesResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    missing_exercises: List[str]


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
    raw: Optional[Any] = None


JobStatusName = Literal["RUNNING", "SUCCEEDED", "FAILED"]


class JobAccepted(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    execution_id: str
    status: JobStatusName = "RUNNING"


class JobStatus(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    execution_id: str
    status: JobStatusName
    created_at: str
    updated_at: str
    # HTTP status the synchronous endpoint would have answered with
    status_code: Optional[int] = None
    result: Optional[Dict[str, Any]] = None
