import logging
import time

from openai import OpenAI

from .bedrock_client import MAX_TOKENS, TEMPERATURE, TOP_P
from .errors import ModelEmptyResponse

logger = logging.getLogger(__name__)


def create_openai_client(api_key: str | None) -> OpenAI:
    return OpenAI(api_key=api_key)


class OpenAIModelClient:
    """Same contract as BedrockModelClient, backed by chat completions."""

    def __init__(self, client: OpenAI, model: str):
        self.client = client
        self.model = model

    def complete(self, prompt: str) -> str:
        started = time.monotonic()
        resp = self.client.chat.completions.create(
            model=self.model,
            temperature=TEMPERATURE,
            top_p=TOP_P,
            max_tokens=MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        logger.info("OpenAI %s answered in %.1fs", self.model, time.monotonic() - started)

        completion = ""
        if resp.choices:
            completion = (resp.choices[0].message.content or "").strip()
        if not completion:
            raise ModelEmptyResponse(raw=resp.model_dump())
        return completion
