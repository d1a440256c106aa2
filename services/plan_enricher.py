"""
Plan Enricher - attaches catalog metadata to model-proposed plans and builds supersets
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic.alias_generators import to_camel

from app.schema import (
    EnrichedPlanItem,
    LegacySessionItem,
    PlanItem,
    RawPlanItem,
    Session,
    SupersetGroup,
)

from .exercise_matcher import ExerciseMatcher, ensure_number, is_reps_value
from .identifiers import next_id

logger = logging.getLogger(__name__)

DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_REST = 60
SUPERSET_NAME = "Superserie"

def _declared_keys(model) -> frozenset:
    keys = set()
    for name, field in model.model_fields.items():
        keys.update({name, to_camel(name), field.alias or name})
    return frozenset(keys)


# Declared item fields (either spelling) are computed here, never taken from the model
_RESERVED_KEYS = _declared_keys(LegacySessionItem)


def _usable_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class PlanEnricher:
    """Enriches one model plan. Create a new instance per request."""

    def __init__(self, matcher: ExerciseMatcher, id_factory: Callable[[str], str] = next_id):
        self.matcher = matcher
        self.id_factory = id_factory
        self._missing: Dict[str, None] = {}

    @property
    def missing_exercises(self) -> List[str]:
        return list(self._missing)

    def enrich_item(self, value: Any) -> Optional[EnrichedPlanItem]:
        raw = value if isinstance(value, RawPlanItem) else RawPlanItem.parse(value)
        if raw is None or not raw.name:
            return None

        meta = self.matcher.find(raw.name)
        if meta is None:
            self._missing.setdefault(str(raw.name).strip(), None)
            return None

        fields = {
            key: val
            for key, val in raw.to_json().items()
            if key not in _RESERVED_KEYS
        }
        fields.update(
            id=raw.id if _usable_id(raw.id) else self.id_factory("item"),
            name=meta.name,
            equipment=meta.equipment,
            muscle=meta.muscle,
            category=meta.category,
            sets=ensure_number(raw.sets, DEFAULT_SETS),
            reps=raw.reps if is_reps_value(raw.reps) else DEFAULT_REPS,
            rest=ensure_number(raw.rest, DEFAULT_REST),
            notes=raw.notes if isinstance(raw.notes, str) else "",
            selected=False,
        )
        return EnrichedPlanItem.model_validate(fields)

    def build_group(self, value: Any) -> Optional[SupersetGroup]:
        raw = value if isinstance(value, RawPlanItem) else RawPlanItem.parse(value)
        if raw is None:
            return None

        children = raw.children if isinstance(raw.children, list) else []
        kids = [kid for kid in map(self.enrich_item, children) if kid is not None]
        if not kids:
            logger.info("Dropping superset %r: no child matched the catalog", raw.name)
            return None

        group_id = raw.id if _usable_id(raw.id) else self.id_factory("superset")
        first = kids[0]
        for order, kid in enumerate(kids, start=1):
            kid.parent_group_id = group_id
            kid.superset_order = order
            kid.superset_size = len(kids)

        return SupersetGroup(
            id=group_id,
            name=SUPERSET_NAME,
            display_name=f"{SUPERSET_NAME}: " + " + ".join(kid.name for kid in kids),
            is_group=True,
            group_size=len(kids),
            sets=ensure_number(raw.sets, first.sets),
            reps=raw.reps if is_reps_value(raw.reps) else first.reps,
            rest=ensure_number(raw.rest, first.rest),
            notes=raw.notes if isinstance(raw.notes, str) else "",
            children=kids,
        )

    def enrich_session_item(self, value: Any) -> Optional[PlanItem]:
        raw = RawPlanItem.parse(value)
        if raw is not None and raw.wants_group:
            return self.build_group(raw)
        return self.enrich_item(raw)

    def enrich_plan(self, raw_plan: Any) -> List[Session]:
        sessions = raw_plan if isinstance(raw_plan, list) else []
        plan = []
        for idx, raw_session in enumerate(sessions):
            session = raw_session if isinstance(raw_session, dict) else {}
            if isinstance(session.get("items"), list):
                raw_items = session["items"]
            elif isinstance(session.get("children"), list):
                raw_items = session["children"]
            else:
                raw_items = []

            name = session.get("day")
            if name is None:
                name = session.get("name")
            if name is None:
                name = f"Día {idx + 1}"

            items = [
                item
                for item in map(self.enrich_session_item, raw_items)
                if item is not None
            ]
            plan.append(Session(id=idx + 1, name=name, items=items))
        return plan
