"""
Plan generation pipeline for the Workout Planner AI backend
"""

from .exercise_matcher import ExerciseMatcher, ensure_number, normalise_name
from .generation_jobs import GenerationJobStore
from .generation_poller import GenerationStatusPoller
from .legacy_flattener import flatten_plan
from .plan_enricher import PlanEnricher
from .plan_generator import PlanGeneratorService

__all__ = [
    "ExerciseMatcher",
    "GenerationJobStore",
    "GenerationStatusPoller",
    "PlanEnricher",
    "PlanGeneratorService",
    "ensure_number",
    "flatten_plan",
    "normalise_name",
]
