"""LLM Provider 工厂."""

from rin.errors import BadRequest
from rin.llm.base import LLMConfig, LLMProvider
from rin.llm.ollama import OllamaProvider
from rin.llm.openai import OpenAIProvider

# provider -> 默认接口地址
PROVIDER_PRESETS: dict[str, str] = {
    "openai": "https://api.openai.com/v1",
    "deepseek": "https://api.deepseek.com/v1",
    "zhipu": "https://open.bigmodel.cn/api/paas/v4",
    "siliconflow": "https://api.siliconflow.cn/v1",
    "ollama": "http://localhost:11434",
    "custom": "",
}


def resolve_api_url(provider: str, api_url: str | None = None) -> str:
    if provider not in PROVIDER_PRESETS:
        raise BadRequest(f"不支持的 AI Provider: {provider}")
    url = api_url or PROVIDER_PRESETS[provider]
    if not url:
        raise BadRequest("自定义 Provider 需要填写 api_url")
    return url


def create_llm_provider(
    provider: str,
    model: str,
    api_url: str | None = None,
    api_key: str = "",
) -> LLMProvider:
    """根据配置创建 LLM Provider."""
    base_url = resolve_api_url(provider, api_url)
    config = LLMConfig(model=model, temperature=0.7, max_tokens=2000)

    if provider == "ollama":
        return OllamaProvider(config=config, host=base_url)

    # 其余 provider 都走 OpenAI 兼容接口
    return OpenAIProvider(config=config, api_key=api_key, base_url=base_url)
