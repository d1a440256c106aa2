import pytest

from app.errors import CatalogMatchError, PromptValidationError
from app.schema import ExerciseCatalogEntry
from services.plan_generator import parse_generation_request

PRESS_BANCA_PLAN = [{"day": "Día 1", "items": [{"name": "Press banca", "sets": 4, "reps": "8-10"}]}]


class TestParseGenerationRequest:
    def test_trims_prompt_and_notes(self) -> None:
        request = parse_generation_request(
            {"prompt": "  hipertrofia de pecho ", "generalNotes": " 4 días "}
        )
        assert request.prompt == "hipertrofia de pecho"
        assert request.general_notes == "4 días"

    @pytest.mark.parametrize("body", [{}, {"prompt": "   "}, {"prompt": 42}, None, "texto"])
    def test_missing_prompt(self, body) -> None:
        with pytest.raises(PromptValidationError):
            parse_generation_request(body)

    def test_notes_default_to_none(self) -> None:
        assert parse_generation_request({"prompt": "fuerza"}).general_notes is None


class TestGenerate:
    def test_press_banca_scenario(self, make_service) -> None:
        status, body = make_service(PRESS_BANCA_PLAN).respond({"prompt": "hipertrofia de pecho"})

        assert status == 200
        assert body["plan"][0]["id"] == 1
        assert body["plan"][0]["name"] == "Día 1"
        assert body["plan"][0]["items"][0] == {
            "id": "item-1",
            "name": "Press banca",
            "equipment": "Barra",
            "muscle": "Pecho",
            "category": "Fuerza",
            "sets": 4,
            "reps": "8-10",
            "rest": 60,
            "notes": "",
            "selected": False,
        }
        assert body["planLegacy"][0]["items"][0]["isGroup"] is False
        assert body["generalNotes"] is None

    def test_press_inventado_scenario(self, make_service) -> None:
        plan = [{"day": "Día 1", "items": [{"name": "Press inventado"}, {"name": "Press banca"}]}]
        status, body = make_service(plan).respond({"prompt": "hipertrofia de pecho"})

        assert status == 422
        assert body == {
            "message": "Algunos ejercicios solicitados no están en el catálogo",
            "missingExercises": ["Press inventado"],
        }

    def test_unmatched_group_child_rejects_the_plan(self, make_service) -> None:
        plan = [{"day": "Día 1", "items": [{"isGroup": True, "children": [{"name": "Remo fantasma"}]}]}]

        with pytest.raises(CatalogMatchError) as exc_info:
            service = make_service(plan)
            service.generate(parse_generation_request({"prompt": "espalda"}))

        assert exc_info.value.missing_exercises == ["Remo fantasma"]

    def test_prompt_contains_catalog_and_goal(self, make_service) -> None:
        service = make_service(PRESS_BANCA_PLAN)
        service.respond({"prompt": "hipertrofia de pecho", "generalNotes": "Sin lesiones"})
        prompt = service.model.prompts[0]

        assert "Objetivo del usuario: hipertrofia de pecho" in prompt
        assert '"name": "Press banca"' in prompt
        assert '"muscle": "Tríceps"' in prompt
        assert "Sin lesiones" not in prompt

    def test_general_notes_are_echoed(self, make_service) -> None:
        status, body = make_service(PRESS_BANCA_PLAN).respond(
            {"prompt": "fuerza", "generalNotes": "  Calentar 10 min  "}
        )
        assert status == 200
        assert body["generalNotes"] == "Calentar 10 min"

    def test_empty_catalog_rejects_every_exercise(self, make_service) -> None:
        status, body = make_service(PRESS_BANCA_PLAN, exercises=[]).respond({"prompt": "fuerza"})

        assert status == 422
        assert body["missingExercises"] == ["Press banca"]

    def test_catalog_is_loaded_per_request(self, make_service) -> None:
        service = make_service(PRESS_BANCA_PLAN)
        service.respond({"prompt": "a"})
        service.respond({"prompt": "b"})
        assert service.catalog.loads == 2

    def test_missing_prompt_skips_the_model(self, make_service) -> None:
        service = make_service(PRESS_BANCA_PLAN)
        status, body = service.respond({"generalNotes": "x"})

        assert status == 400
        assert body == {"message": "Falta el campo 'prompt'"}
        assert service.model.prompts == []
        assert service.catalog.loads == 0


class TestRespondErrors:
    def test_prose_without_json(self, make_service) -> None:
        status, body = make_service("Lo siento, no puedo ayudar.").respond({"prompt": "x"})
        assert status == 500
        assert body == {"message": "Modelo no devolvió JSON", "raw": "Lo siento, no puedo ayudar."}

    def test_unexpected_errors_become_internal_errors(self, make_service) -> None:
        service = make_service(PRESS_BANCA_PLAN)

        def broken_load():
            raise RuntimeError("ResourceNotFoundException: tabla no encontrada")

        service.catalog.load = broken_load
        status, body = service.respond({"prompt": "x"})

        assert status == 500
        assert body == {
            "message": "Error interno",
            "error": "ResourceNotFoundException: tabla no encontrada",
        }

    def test_duplicate_catalog_names_keep_the_last_entry(self, make_service) -> None:
        exercises = [
            ExerciseCatalogEntry(name="Press banca", equipment="Barra"),
            ExerciseCatalogEntry(name="press banca", equipment="Máquina"),
        ]
        status, body = make_service(PRESS_BANCA_PLAN, exercises=exercises).respond({"prompt": "x"})

        assert status == 200
        assert body["plan"][0]["items"][0]["equipment"] == "Máquina"


class TestUntrustedModelFields:
    def test_snake_case_linkage_on_plain_items_is_ignored(self, make_service) -> None:
        plan = [
            {
                "day": "Día 1",
                "items": [{"name": "Press banca", "superset_order": 7, "parent_group_id": "zz"}],
            }
        ]
        status, body = make_service(plan).respond({"prompt": "pecho"})
        item = body["plan"][0]["items"][0]

        assert status == 200
        assert "supersetOrder" not in item
        assert "parentGroupId" not in item
        assert "supersetId" not in body["planLegacy"][0]["items"][0]

    @pytest.mark.parametrize(
        "fields", [{"superset_size": "dos"}, {"superset_id": 5}, {"supersetLabel": {"a": 1}}]
    )
    def test_wrongly_typed_linkage_does_not_fail_the_request(self, make_service, fields) -> None:
        plan = [{"day": "Día 1", "items": [{"name": "Press banca", **fields}]}]
        status, body = make_service(plan).respond({"prompt": "pecho"})

        assert status == 200
        assert body["planLegacy"][0]["items"][0]["isGroup"] is False

    def test_huge_numbers_fall_back_to_defaults(self, make_service) -> None:
        completion = '[{"day": "Día 1", "items": [{"name": "Press banca", "sets": 1' + "0" * 400 + "}]}]"
        status, body = make_service(completion).respond({"prompt": "pecho"})

        assert status == 200
        assert body["plan"][0]["items"][0]["sets"] == 3
