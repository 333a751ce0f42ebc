"""LLM (Language Model) configuration."""
from typing import Optional

from langchain_openai import AzureChatOpenAI
from .env import (
    AZURE_OPENAI_KEY,
    AZURE_OPENAI_ENDPOINT,
    AZURE_OPENAI_API_VERSION,
    AZURE_OPENAI_DEPLOYMENT,
    LLM_TEMPERATURE,
    LLM_TIMEOUT,
)


def get_llm(model: str = None, temperature: Optional[float] = None, timeout: Optional[float] = None):
    """Create and return an Azure OpenAI chat model.

    ``timeout`` bounds every model call; a call that exceeds it raises and is
    handled like any other invocation failure.
    """
    deployment = model if model else AZURE_OPENAI_DEPLOYMENT
    return AzureChatOpenAI(
        azure_deployment=deployment,
        api_version=AZURE_OPENAI_API_VERSION,
        azure_endpoint=AZURE_OPENAI_ENDPOINT,
        api_key=AZURE_OPENAI_KEY,
        temperature=LLM_TEMPERATURE if temperature is None else temperature,
        timeout=LLM_TIMEOUT if timeout is None else timeout,
    )
