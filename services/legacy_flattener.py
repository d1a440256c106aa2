"""
Legacy Flattener - group-unaware view of a plan for consumers that predate supersets
"""

from typing import List

from app.schema import LegacySession, LegacySessionItem, Session, SupersetGroup

from .plan_enricher import SUPERSET_NAME


def _without_children(data: dict) -> dict:
    return {key: val for key, val in data.items() if key != "children"}


def flatten_group(group: SupersetGroup) -> List[LegacySessionItem]:
    flattened = []
    for child in group.children:
        fields = _without_children(child.to_json())
        size = child.superset_size
        if size is None:
            size = group.group_size or len(group.children)
        fields.update(
            isGroup=False,
            supersetId=group.id,
            supersetLabel=group.display_name or SUPERSET_NAME,
            supersetOrder=child.superset_order,
            supersetSize=size,
        )
        flattened.append(LegacySessionItem.model_validate(fields))
    return flattened


def flatten_session(session: Session) -> LegacySession:
    items: List[LegacySessionItem] = []
    for item in session.items:
        if isinstance(item, SupersetGroup):
            items.extend(flatten_group(item))
        else:
            fields = _without_children(item.to_json())
            fields["isGroup"] = False
            items.append(LegacySessionItem.model_validate(fields))
    return LegacySession(id=session.id, name=session.name, items=items)


def flatten_plan(plan: List[Session]) -> List[LegacySession]:
    return [flatten_session(session) for session in plan]
