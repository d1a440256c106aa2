import pytest

from services.generation_jobs import FAILED, RUNNING, SUCCEEDED, GenerationJobStore

PLAN = [{"day": "Día 1", "items": [{"name": "Press banca"}]}]


@pytest.fixture
def store() -> GenerationJobStore:
    return GenerationJobStore()


class TestGenerationJobStore:
    def test_start_registers_a_running_job(self, store) -> None:
        execution_id = store.start()
        job = store.get(execution_id)

        assert job.status == RUNNING
        assert job.result is None
        assert job.created_at == job.updated_at

    def test_ids_are_unique(self, store) -> None:
        assert store.start() != store.start()

    def test_succeed(self, store) -> None:
        execution_id = store.start()
        store.succeed(execution_id, {"plan": []})
        job = store.get(execution_id)

        assert job.status == SUCCEEDED
        assert job.status_code == 200
        assert job.model_dump(by_alias=True)["result"] == {"plan": []}

    def test_fail(self, store) -> None:
        execution_id = store.start()
        store.fail(execution_id, 422, {"missingExercises": ["Press inventado"]})
        data = store.get(execution_id).model_dump(by_alias=True)

        assert data["status"] == FAILED
        assert data["statusCode"] == 422
        assert data["executionId"] == execution_id

    def test_unknown_jobs(self, store) -> None:
        assert store.get("nope") is None
        with pytest.raises(KeyError):
            store.succeed("nope", {})

    def test_run_records_success(self, store, make_service) -> None:
        execution_id = store.start()
        store.run(execution_id, make_service(PLAN), {"prompt": "fuerza"})
        job = store.get(execution_id)

        assert job.status == SUCCEEDED
        assert job.result["plan"][0]["items"][0]["name"] == "Press banca"

    def test_run_records_failures(self, store, make_service) -> None:
        execution_id = store.start()
        store.run(execution_id, make_service(PLAN), {"prompt": ""})
        job = store.get(execution_id)

        assert job.status == FAILED
        assert job.status_code == 400
        assert job.result == {"message": "Falta el campo 'prompt'"}
