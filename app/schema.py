from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ExerciseCatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    equipment: str = "Sin equipo"
    muscle: str = "Desconocido"
    category: str = "General"


class PlanModel(BaseModel):
    # Plans travel as camelCase JSON and keep any extra keys the model sent
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class RawPlanItem(PlanModel):
    """One item exactly as the model produced it. Nothing here is trusted."""

    id: Any = None
    name: Any = None
    sets: Any = None
    reps: Any = None
    rest: Any = None
    notes: Any = None
    is_group: Any = None
    children: Any = None

    @classmethod
    def parse(cls, value: Any) -> Optional["RawPlanItem"]:
        if not isinstance(value, dict):
            return None
        return cls.model_validate(value)

    @property
    def wants_group(self) -> bool:
        return bool(self.is_group) or isinstance(self.children, list)


class EnrichedPlanItem(PlanModel):
    id: str
    name: str
    equipment: str
    muscle: str
    category: str
    sets: Union[int, float]
    reps: Union[int, float, str]
    rest: Union[int, float]
    notes: str = ""
    selected: bool = False
    # superset linkage, only set on group children
    parent_group_id: Optional[str] = None
    superset_order: Optional[int] = None
    superset_size: Optional[int] = None


class SupersetGroup(PlanModel):
    id: str
    name: str = "Superserie"
    display_name: str
    is_group: bool = True
    group_size: int
    sets: Union[int, float]
    reps: Union[int, float, str]
    rest: Union[int, float]
    notes: str = ""
    children: List[EnrichedPlanItem]


PlanItem = Union[SupersetGroup, EnrichedPlanItem]


class Session(PlanModel):
    # days start at 1
    id: int
    name: Any
    items: List[PlanItem]


class LegacySessionItem(EnrichedPlanItem):
    is_group: bool = False
    superset_id: Optional[str] = None
    superset_label: Optional[str] = None


class LegacySession(PlanModel):
    id: int
    name: Any
    items: List[LegacySessionItem]
