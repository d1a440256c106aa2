import asyncio

import aiohttp
import pytest
from aiohttp import test_utils, web

from services.generation_poller import GenerationStatusPoller


def status_app(responses):
    """App answering the status route with ``responses`` in order, repeating the last one."""
    calls = []

    async def job_status(request):
        calls.append(request.match_info["execution_id"])
        code, body = responses[min(len(calls), len(responses)) - 1]
        if body is None:
            return web.Response(status=code)
        return web.json_response(body, status=code)

    app = web.Application()
    app.router.add_get("/generate-plan/jobs/{execution_id}", job_status)
    return app, calls


async def poll_with(responses, on_progress=None):
    app, calls = status_app(responses)
    async with test_utils.TestServer(app) as server:
        async with aiohttp.ClientSession() as session:
            base_url = f"http://{server.host}:{server.port}/"
            poller = GenerationStatusPoller(session, base_url, interval=0.01)
            result = await poller.poll("exec-1", on_progress=on_progress)
    return result, calls


class TestGenerationStatusPoller:
    def test_status_url(self) -> None:
        poller = GenerationStatusPoller(None, "http://api.local/")
        assert poller.status_url("abc") == "http://api.local/generate-plan/jobs/abc"

    async def test_returns_terminal_status(self) -> None:
        done = {"executionId": "exec-1", "status": "SUCCEEDED", "result": {"plan": []}}
        result, calls = await poll_with([(200, done)])

        assert result == done
        assert calls == ["exec-1"]

    async def test_not_found_and_server_errors_keep_polling(self) -> None:
        progress = []
        responses = [
            (404, None),
            (500, None),
            (200, {"status": "RUNNING"}),
            (200, {"status": "FAILED", "statusCode": 422}),
        ]
        result, calls = await poll_with(responses, on_progress=progress.append)

        assert result["status"] == "FAILED"
        assert len(calls) == 4
        assert progress == [{"status": "RUNNING"}]

    async def test_non_object_bodies_keep_polling(self) -> None:
        progress = []
        responses = [
            (200, ["RUNNING"]),
            (200, "SUCCEEDED"),
            (200, {"status": "SUCCEEDED", "result": {"plan": []}}),
        ]
        result, calls = await poll_with(responses, on_progress=progress.append)

        assert result["status"] == "SUCCEEDED"
        assert len(calls) == 3
        assert progress == []

    async def test_polls_until_cancelled(self) -> None:
        app, calls = status_app([(200, {"status": "RUNNING"})])
        async with test_utils.TestServer(app) as server:
            async with aiohttp.ClientSession() as session:
                poller = GenerationStatusPoller(
                    session, f"http://{server.host}:{server.port}", interval=0.01
                )
                with pytest.raises(asyncio.TimeoutError):
                    await asyncio.wait_for(poller.poll("exec-1"), timeout=0.2)

        assert len(calls) > 1
