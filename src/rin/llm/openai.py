"""OpenAI 兼容接口 Provider."""

from typing import Any

from openai import AsyncOpenAI

from rin.llm.base import LLMConfig, LLMProvider, Message


class OpenAIProvider(LLMProvider):
    """OpenAI API Provider（DeepSeek、智谱等兼容接口共用）."""

    def __init__(
        self,
        config: LLMConfig,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
    ) -> None:
        super().__init__(config)
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    async def close(self) -> None:
        await self.client.close()

    def _to_openai(self, messages: list[Message]) -> list[dict[str, Any]]:
        return [{"role": m.role, "content": m.content} for m in messages]

    async def chat(self, messages: list[Message]) -> str:
        response = await self.client.chat.completions.create(
            model=self.config.model,
            messages=self._to_openai(messages),
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )

        content = response.choices[0].message.content
        return content or ""
