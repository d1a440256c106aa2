#!/usr/bin/env python3
"""
Development helpers for Workout Planner AI
Run with: uv run scripts/dev.py [command]
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent

FORMATTERS = [
    (["black", "."], "Formatting with black"),
    (["isort", "."], "Sorting imports with isort"),
]
CHECKS = [
    (["black", "--check", "."], "Checking formatting"),
    (["isort", "--check-only", "."], "Checking import order"),
    (["flake8", "app", "models", "services", "main.py"], "Linting with flake8"),
    (["mypy", "app", "models", "services"], "Type checking with mypy"),
    (["pytest", "-v"], "Running tests"),
]


def run_command(cmd: list[str], description: str = "") -> bool:
    if description:
        print(f"🚀 {description}")
    try:
        subprocess.run(cmd, check=True, cwd=ROOT)
        return True
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        print(f"❌ {' '.join(cmd)} failed: {e}")
        return False


def run_all(commands) -> bool:
    ok = True
    for cmd, description in commands:
        ok &= run_command(cmd, description)
    return ok


def serve():
    """FastAPI app with hot reload on :8000"""
    print("🏋️ Workout Planner AI on http://localhost:8000/docs")
    run_command(["uvicorn", "main:app", "--reload", "--host", "0.0.0.0", "--port", "8000"])


def test():
    run_command(["pytest", "-v"], "Running tests")


def format_code():
    run_all(FORMATTERS)


def check():
    if run_all(CHECKS):
        print("✅ All checks passed!")
    else:
        print("❌ Some checks failed!")
        sys.exit(1)


def invoke(prompt: str):
    """Call the Lambda handler in-process with an API Gateway style event."""
    sys.path.insert(0, str(ROOT))
    from app.handler import handler

    event = {
        "httpMethod": "POST",
        "headers": {"origin": "http://localhost:4200"},
        "body": json.dumps({"prompt": prompt}),
    }
    resp = handler(event, None)
    print(f"📡 {resp['statusCode']}")
    print(json.dumps(json.loads(resp["body"]), ensure_ascii=False, indent=2))


def setup():
    env_file = ROOT / ".env"
    env_example = ROOT / ".env.example"
    if not env_file.exists() and env_example.exists():
        env_file.write_text(env_example.read_text())
        print("📝 Created .env from .env.example")

    print("\n📋 Next steps:")
    print("1. Set EXERCISES_TABLE and MODEL_ID in .env (AWS credentials come from your profile)")
    print("2. Or switch MODEL_PROVIDER=openai / CATALOG_BACKEND=supabase and fill their keys")
    print("3. Run: uv run scripts/dev.py serve")


def main():
    parser = argparse.ArgumentParser(description="Workout Planner AI development tools")
    parser.add_argument("command", choices=["serve", "test", "format", "check", "invoke", "setup"])
    parser.add_argument("--prompt", default="hipertrofia de pecho", help="Goal sent by 'invoke'")
    args = parser.parse_args()

    if args.command == "invoke":
        invoke(args.prompt)
        return

    commands = {
        "serve": serve,
        "test": test,
        "format": format_code,
        "check": check,
        "setup": setup,
    }
    commands[args.command]()


if __name__ == "__main__":
    main()
