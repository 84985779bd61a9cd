from interviewiq.providers.llm.base import LLMClient
from interviewiq.providers.llm.openai_impl import OpenAILLMClient

__all__ = ["LLMClient", "OpenAILLMClient"]
