import json
import logging
import time

import boto3

from .errors import ModelEmptyResponse

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "bedrock-2023-05-31"

# ---------- sampling ----------
MAX_TOKENS = 900
TEMPERATURE = 0.5
TOP_P = 0.9


def create_bedrock_client(region: str):
    return boto3.client("bedrock-runtime", region_name=region)


class BedrockModelClient:
    """Claude on Bedrock through the Anthropic messages API."""

    def __init__(self, client, model_id: str):
        self.client = client
        self.model_id = model_id

    def request_body(self, prompt: str) -> dict:
        return {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "top_p": TOP_P,
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": prompt}]}
            ],
        }

    def complete(self, prompt: str) -> str:
        started = time.monotonic()
        resp = self.client.invoke_model(
            modelId=self.model_id,
            contentType="application/json",
            accept="application/json",
            body=json.dumps(self.request_body(prompt)),
        )
        parsed = json.loads(resp["body"].read().decode("utf-8"))
        logger.info(
            "Bedrock %s answered in %.1fs", self.model_id, time.monotonic() - started
        )

        content = parsed.get("content") if isinstance(parsed, dict) else None
        text = ""
        if isinstance(content, list) and content and isinstance(content[0], dict):
            text = content[0].get("text") or ""
        completion = text.strip() if isinstance(text, str) else ""
        if not completion:
            raise ModelEmptyResponse(raw=parsed)
        return completion
