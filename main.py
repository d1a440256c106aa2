"""
Workout Planner AI - HTTP API for catalog-constrained workout plan generation
"""

import logging
from functools import lru_cache
from typing import Any

import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.config import Settings
from app.errors import InternalError, PlanGenerationError, internal_error_body
from app.factory import build_plan_generator
from app.handler import cors_headers, request_origin
from app.logging_config import setup_logging
from models.responses import (
    ErrorResponse,
    JobAccepted,
    JobStatus,
    MissingExercisesResponse,
    PlanGenerated,
)
from services.generation_jobs import GenerationJobStore
from services.plan_generator import PlanGeneratorService, parse_generation_request

settings = Settings.from_env()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Workout Planner AI",
    description="Generates workout plans restricted to the exercise catalog",
    version="1.0.0",
)

jobs = GenerationJobStore()


@lru_cache
def _build_plan_generator() -> PlanGeneratorService:
    return build_plan_generator(settings)


def get_plan_generator() -> PlanGeneratorService:
    try:
        return _build_plan_generator()
    except Exception as e:
        logger.exception("Could not build the plan generator")
        raise InternalError(e) from e


def get_job_store() -> GenerationJobStore:
    return jobs


def cors_json(request: Request, status_code: int, body: Any) -> JSONResponse:
    return JSONResponse(
        body,
        status_code=status_code,
        headers=cors_headers(request_origin(dict(request.headers))),
    )


async def read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    return await request.json()


@app.exception_handler(PlanGenerationError)
async def plan_generation_error(request: Request, exc: PlanGenerationError):
    return cors_json(request, exc.status_code, exc.body())


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.options("/generate-plan")
async def generate_plan_preflight(request: Request):
    return cors_json(request, 200, {"ok": True})


@app.post(
    "/generate-plan",
    response_model=PlanGenerated,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": MissingExercisesResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_plan(
    request: Request, service: PlanGeneratorService = Depends(get_plan_generator)
):
    """Generate a plan synchronously: catalog scan, model call, enrichment"""
    try:
        body = await read_body(request)
    except ValueError as e:
        return cors_json(request, 500, internal_error_body(e))

    status_code, payload = await run_in_threadpool(service.respond, body)
    return cors_json(request, status_code, payload)


@app.post("/generate-plan/jobs", status_code=202, response_model=JobAccepted)
async def start_generation_job(
    request: Request,
    background_tasks: BackgroundTasks,
    service: PlanGeneratorService = Depends(get_plan_generator),
    store: GenerationJobStore = Depends(get_job_store),
):
    """Start a generation in the background and return its execution id"""
    try:
        body = await read_body(request)
        parse_generation_request(body)
    except PlanGenerationError as e:
        return cors_json(request, e.status_code, e.body())
    except ValueError as e:
        return cors_json(request, 500, internal_error_body(e))

    execution_id = store.start()
    background_tasks.add_task(store.run, execution_id, service, body)
    logger.info("Started generation job %s", execution_id)

    accepted = JobAccepted(execution_id=execution_id)
    return cors_json(request, 202, accepted.model_dump(by_alias=True))


@app.get("/generate-plan/jobs/{execution_id}", response_model=JobStatus)
async def generation_job_status(
    request: Request,
    execution_id: str,
    store: GenerationJobStore = Depends(get_job_store),
):
    job = store.get(execution_id)
    if job is None:
        return cors_json(request, 404, {"message": "Ejecución no encontrada"})
    return cors_json(request, 200, job.model_dump(by_alias=True))


# Development server
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
