"""
In-memory registry of asynchronous plan generation runs.

Jobs live for the lifetime of the process only; the accepted plan is persisted
elsewhere by the caller.
"""

import datetime
import threading
import uuid
from typing import Any, Dict, Optional

from models.responses import JobStatus

RUNNING = "RUNNING"
SUCCEEDED = "SUCCEEDED"
FAILED = "FAILED"
TERMINAL_STATUSES = frozenset({SUCCEEDED, FAILED})


def _now() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat()


class GenerationJobStore:
    def __init__(self):
        self._jobs: Dict[str, JobStatus] = {}
        self._lock = threading.Lock()

    def start(self) -> str:
        execution_id = str(uuid.uuid4())
        ts = _now()
        with self._lock:
            self._jobs[execution_id] = JobStatus(
                execution_id=execution_id, status=RUNNING, created_at=ts, updated_at=ts
            )
        return execution_id

    def _finish(self, execution_id: str, status: str, status_code: int, body: Dict[str, Any]):
        with self._lock:
            job = self._jobs.get(execution_id)
            if job is None:
                raise KeyError(execution_id)
            self._jobs[execution_id] = job.model_copy(
                update={
                    "status": status,
                    "status_code": status_code,
                    "result": body,
                    "updated_at": _now(),
                }
            )

    def succeed(self, execution_id: str, body: Dict[str, Any]):
        self._finish(execution_id, SUCCEEDED, 200, body)

    def fail(self, execution_id: str, status_code: int, body: Dict[str, Any]):
        self._finish(execution_id, FAILED, status_code, body)

    def get(self, execution_id: str) -> Optional[JobStatus]:
        with self._lock:
            return self._jobs.get(execution_id)

    def run(self, execution_id: str, service, body: Any):
        """Background task body: run the pipeline and record its outcome."""
        status_code, payload = service.respond(body)
        if status_code == 200:
            self.succeed(execution_id, payload)
        else:
            self.fail(execution_id, status_code, payload)
