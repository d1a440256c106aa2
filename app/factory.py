import logging

from services.plan_generator import PlanGeneratorService

from .config import Settings

logger = logging.getLogger(__name__)


def build_catalog(settings: Settings):
    if settings.catalog_backend == "supabase":
        from .supabase_client import SupabaseExerciseCatalog, create_supabase_client

        client = create_supabase_client(settings.supabase_url, settings.supabase_key)
        return SupabaseExerciseCatalog(client, settings.exercises_table)

    from .dynamo_client import DynamoExerciseCatalog, create_dynamodb_client

    return DynamoExerciseCatalog(
        create_dynamodb_client(settings.aws_region), settings.exercises_table
    )


def build_model(settings: Settings):
    if settings.model_provider == "openai":
        from .openai_client import OpenAIModelClient, create_openai_client

        return OpenAIModelClient(
            create_openai_client(settings.openai_api_key), settings.openai_model
        )

    from .bedrock_client import BedrockModelClient, create_bedrock_client

    return BedrockModelClient(create_bedrock_client(settings.aws_region), settings.model_id)


def build_plan_generator(settings: Settings) -> PlanGeneratorService:
    """Create the clients once per process and wire them into the service."""
    logger.info(
        "Plan generator: catalog=%s table=%s model=%s",
        settings.catalog_backend,
        settings.exercises_table,
        settings.model_id if settings.model_provider == "bedrock" else settings.openai_model,
    )
    return PlanGeneratorService(build_catalog(settings), build_model(settings))
