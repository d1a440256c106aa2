"""
Plan Generator Service - catalog scan, model call, enrichment and flattening in one request
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from app.errors import (
    CatalogMatchError,
    PlanGenerationError,
    PromptValidationError,
    internal_error_body,
)
from app.schema import ExerciseCatalogEntry
from models.responses import GenerationRequest, PlanGenerated

from .exercise_matcher import ExerciseMatcher
from .identifiers import next_id
from .json_extraction import extract_plan
from .legacy_flattener import flatten_plan
from .plan_enricher import PlanEnricher
from .prompt_builder import build_prompt

logger = logging.getLogger(__name__)


class ExerciseCatalog(Protocol):
    def load(self) -> List[ExerciseCatalogEntry]: ...


class ModelClient(Protocol):
    def complete(self, prompt: str) -> str: ...


def _trimmed(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) else None


def parse_generation_request(body: Any) -> GenerationRequest:
    body = body if isinstance(body, dict) else {}
    prompt = _trimmed(body.get("prompt"))
    if not prompt:
        raise PromptValidationError()
    return GenerationRequest(prompt=prompt, generalNotes=_trimmed(body.get("generalNotes")))


class PlanGeneratorService:
    """Runs the whole pipeline synchronously; clients are injected and shared."""

    def __init__(
        self,
        catalog: ExerciseCatalog,
        model: ModelClient,
        id_factory: Callable[[str], str] = next_id,
    ):
        self.catalog = catalog
        self.model = model
        self.id_factory = id_factory

    def generate(self, request: GenerationRequest) -> PlanGenerated:
        exercises = self.catalog.load()
        matcher = ExerciseMatcher(exercises)

        completion = self.model.complete(build_prompt(request.prompt, exercises))
        raw_plan = extract_plan(completion)

        enricher = PlanEnricher(matcher, self.id_factory)
        plan = enricher.enrich_plan(raw_plan)
        if enricher.missing_exercises:
            logger.warning(
                "Plan rejected, exercises not in catalog: %s",
                ", ".join(enricher.missing_exercises),
            )
            raise CatalogMatchError(enricher.missing_exercises)

        logger.info(
            "Generated plan with %d sessions from %d catalog exercises",
            len(plan),
            len(matcher),
        )
        return PlanGenerated(
            plan=plan,
            plan_legacy=flatten_plan(plan),
            general_notes=request.general_notes,
        )

    def respond(self, body: Any) -> Tuple[int, Dict[str, Any]]:
        """Status code and JSON body for a raw request body; never raises."""
        try:
            request = parse_generation_request(body)
            return 200, self.generate(request).to_json()
        except PlanGenerationError as e:
            return e.status_code, e.body()
        except Exception as e:
            logger.exception("Plan generation failed")
            return 500, internal_error_body(e)
