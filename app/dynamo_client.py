import logging
from typing import Any, Dict, List

import boto3

from .schema import ExerciseCatalogEntry

logger = logging.getLogger(__name__)


def create_dynamodb_client(region: str):
    return boto3.client("dynamodb", region_name=region)


def _string_attr(item: Dict[str, Any], key: str) -> str | None:
    value = item.get(key)
    if isinstance(value, dict):
        return value.get("S")
    return None


def catalog_entry_from_item(item: Dict[str, Any]) -> ExerciseCatalogEntry | None:
    """Map a low-level DynamoDB item to a catalog entry; nameless items are skipped."""
    name = _string_attr(item, "name") or ""
    if not name:
        return None
    return ExerciseCatalogEntry(
        name=name,
        equipment=_string_attr(item, "equipment") or "Sin equipo",
        muscle=_string_attr(item, "muscle") or "Desconocido",
        category=_string_attr(item, "category") or "General",
    )


class DynamoExerciseCatalog:
    def __init__(self, client, table_name: str):
        self.client = client
        self.table_name = table_name

    def load(self) -> List[ExerciseCatalogEntry]:
        paginator = self.client.get_paginator("scan")
        pages = paginator.paginate(
            TableName=self.table_name,
            ProjectionExpression="#n, equipment, muscle, category",
            ExpressionAttributeNames={"#n": "name"},
        )
        exercises = []
        for page in pages:
            for item in page.get("Items", []):
                entry = catalog_entry_from_item(item)
                if entry:
                    exercises.append(entry)
        logger.info("Loaded %d exercises from %s", len(exercises), self.table_name)
        return exercises
