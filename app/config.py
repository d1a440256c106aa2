import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_MODEL_ID = "anthropic.claude-3-sonnet-20240229-v1:0"
GENERATION_MODEL = "gpt-4.1"

MODEL_PROVIDERS = ("bedrock", "openai")
CATALOG_BACKENDS = ("dynamodb", "supabase")


class Settings(BaseModel):
    aws_region: str = "us-east-1"
    exercises_table: str = "Exercises"
    model_id: str = DEFAULT_MODEL_ID
    model_provider: str = "bedrock"
    openai_api_key: str | None = None
    openai_model: str = GENERATION_MODEL
    catalog_backend: str = "dynamodb"
    supabase_url: str | None = None
    supabase_key: str | None = None
    status_poll_interval: float = 2.5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            aws_region=os.getenv("AWS_REGION") or "us-east-1",
            exercises_table=os.getenv("EXERCISES_TABLE") or "Exercises",
            model_id=os.getenv("MODEL_ID") or DEFAULT_MODEL_ID,
            model_provider=(os.getenv("MODEL_PROVIDER") or "bedrock").lower(),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_model=os.getenv("OPENAI_MODEL") or GENERATION_MODEL,
            catalog_backend=(os.getenv("CATALOG_BACKEND") or "dynamodb").lower(),
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
            status_poll_interval=float(os.getenv("STATUS_POLL_INTERVAL") or 2.5),
            log_level=os.getenv("LOG_LEVEL") or "INFO",
        )
        settings.validate_backends()
        return settings

    def validate_backends(self):
        if self.model_provider not in MODEL_PROVIDERS:
            raise ValueError(
                f"MODEL_PROVIDER must be one of {', '.join(MODEL_PROVIDERS)}, "
                f"got {self.model_provider!r}"
            )
        if self.catalog_backend not in CATALOG_BACKENDS:
            raise ValueError(
                f"CATALOG_BACKEND must be one of {', '.join(CATALOG_BACKENDS)}, "
                f"got {self.catalog_backend!r}"
            )
        if self.catalog_backend == "supabase" and not (
            self.supabase_url and self.supabase_key
        ):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables must be set"
            )
