#!/usr/bin/env python3
"""
Generate a plan from the terminal and print it.
Run with: uv run scripts/preview_plan.py "hipertrofia de pecho" [--remote http://localhost:8000]
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict

import aiohttp
from rich.console import Console
from rich.table import Table

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import Settings  # noqa: E402
from app.factory import build_plan_generator  # noqa: E402
from app.logging_config import setup_logging  # noqa: E402
from services.feedback import map_generic_error, map_http_error  # noqa: E402
from services.generation_poller import GenerationStatusPoller  # noqa: E402

console = Console()


def render_plan(payload: Dict[str, Any]):
    for session in payload.get("plan", []):
        table = Table(title=f"🏋️ {session['name']}")
        table.add_column("Ejercicio", style="cyan")
        table.add_column("Equipo")
        table.add_column("Músculo")
        table.add_column("Series", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("Descanso", justify="right")

        for item in session["items"]:
            rows = item["children"] if item.get("isGroup") else [item]
            for row in rows:
                label = row["name"]
                if row.get("supersetOrder"):
                    label = f"[magenta]{row['supersetOrder']}/{row['supersetSize']}[/magenta] {label}"
                table.add_row(
                    label,
                    row["equipment"],
                    row["muscle"],
                    str(row["sets"]),
                    str(row["reps"]),
                    f"{row['rest']} s",
                )
        console.print(table)

    if payload.get("generalNotes"):
        console.print(f"📝 {payload['generalNotes']}")


def render_failure(status: int, payload: Dict[str, Any]):
    console.print(f"\n❌ [bold red]{map_http_error(status)}[/bold red]")
    if payload.get("missingExercises"):
        for name in payload["missingExercises"]:
            console.print(f"   • {name}")
    elif payload.get("message"):
        console.print(map_generic_error(payload["message"]))


def run_local(body: Dict[str, Any]) -> int:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    service = build_plan_generator(settings)

    with console.status("Generando plan con IA..."):
        status, payload = service.respond(body)

    if status != 200:
        render_failure(status, payload)
        return 1
    render_plan(payload)
    return 0


async def run_remote(base_url: str, body: Dict[str, Any], interval: float) -> int:
    async with aiohttp.ClientSession() as session:
        try:
            async with session.post(f"{base_url.rstrip('/')}/generate-plan/jobs", json=body) as resp:
                payload = await resp.json()
                if resp.status != 202:
                    render_failure(resp.status, payload)
                    return 1
        except aiohttp.ClientError:
            console.print(map_http_error(None))
            return 1

        execution_id = payload["executionId"]
        console.print(f"🚀 Ejecución [bold cyan]{execution_id}[/bold cyan]")

        poller = GenerationStatusPoller(session, base_url, interval=interval)
        final = await poller.poll(
            execution_id,
            on_progress=lambda status: console.print(f"⏳ {status.get('status')}..."),
        )

    if final.get("status") != "SUCCEEDED":
        render_failure(final.get("statusCode") or 500, final.get("result") or {})
        return 1
    render_plan(final["result"])
    return 0


def main():
    parser = argparse.ArgumentParser(description="Preview an AI-generated workout plan")
    parser.add_argument("prompt", help="Training goal, e.g. 'hipertrofia de pecho'")
    parser.add_argument("--notes", default=None, help="General notes echoed back with the plan")
    parser.add_argument("--remote", default=None, help="Base URL of a running API; polls a background job")
    parser.add_argument("--interval", type=float, default=None, help="Polling interval in seconds")
    args = parser.parse_args()

    body = {"prompt": args.prompt, "generalNotes": args.notes}
    if args.remote:
        interval = args.interval or Settings.from_env().status_poll_interval
        code = asyncio.run(run_remote(args.remote, body, interval))
    else:
        code = run_local(body)
    sys.exit(code)


if __name__ == "__main__":
    main()
