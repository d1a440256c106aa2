import json
from typing import Iterable

from app.schema import ExerciseCatalogEntry

PLAN_PROMPT = """
Eres un entrenador personal senior.
Lista de ejercicios permitidos:
{exercise_pool_json}

Objetivo del usuario: {goal}

REGLAS DE FORMATO
- Devuelve SOLO el JSON: array de sesiones.
- Cada sesión debe tener "day" o "name", y "items".
- "sets" y "rest" número. "reps" número o string (8-12, 60 s, AMRAP 5').
- Para superseries:
{{ "name":"Superserie","isGroup":true,"children":[{{ej1}},{{ej2}}] }}
- Copia exactamente el "name" de la lista. No inventes ejercicios.
"""


def build_prompt(goal: str, exercises: Iterable[ExerciseCatalogEntry]) -> str:
    """Render the generation prompt; an empty catalog still produces a prompt."""
    exercise_pool = [exercise.model_dump() for exercise in exercises]
    return PLAN_PROMPT.format(
        exercise_pool_json=json.dumps(exercise_pool, ensure_ascii=False, indent=2),
        goal=goal,
    ).strip()
