"""Ollama LLM Provider."""

import httpx

from rin.llm.base import LLMConfig, LLMProvider, Message


class OllamaProvider(LLMProvider):
    """Ollama 本地模型 Provider."""

    def __init__(
        self,
        config: LLMConfig,
        host: str = "http://localhost:11434",
        timeout: float = 60.0,
    ) -> None:
        super().__init__(config)
        self.host = host.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    def _payload(self, messages: list[Message]) -> dict:
        return {
            "model": self.config.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "num_predict": self.config.max_tokens,
            },
        }

    async def chat(self, messages: list[Message]) -> str:
        url = f"{self.host}/api/chat"
        response = await self._client.post(url, json=self._payload(messages))
        response.raise_for_status()

        data = response.json()
        return data.get("message", {}).get("content", "")
