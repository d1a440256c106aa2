import logging
from typing import List

from supabase import Client, create_client

from .schema import ExerciseCatalogEntry

logger = logging.getLogger(__name__)

EXERCISE_COLUMNS = "name, equipment, muscle, category"


def create_supabase_client(url: str, key: str) -> Client:
    return create_client(url, key)


class SupabaseExerciseCatalog:
    """Reads the catalog from a Supabase table with the same columns as the DynamoDB one."""

    def __init__(self, client: Client, table_name: str):
        self.client = client
        self.table_name = table_name

    def load(self) -> List[ExerciseCatalogEntry]:
        rows = (
            self.client.table(self.table_name)
            .select(EXERCISE_COLUMNS)
            .execute()
            .data
        ) or []
        exercises = [
            ExerciseCatalogEntry(
                name=row["name"],
                equipment=row.get("equipment") or "Sin equipo",
                muscle=row.get("muscle") or "Desconocido",
                category=row.get("category") or "General",
            )
            for row in rows
            if isinstance(row.get("name"), str) and row["name"]
        ]
        logger.info("Loaded %d exercises from %s", len(exercises), self.table_name)
        return exercises


"""
Supabase table suggestion (SQL):

create table exercises (
  id uuid primary key default gen_random_uuid(),
  name text not null,
  equipment text,
  muscle text,
  category text
);
"""
