# backend-server/app/services/ai_gateway.py
"""
Provider selection and fallback for the language-model vendors.

Callers hand over an OpenAI-style message list and get text back. The gateway
decides which configured vendor to call, translates the request into that
vendor's wire format, and returns a canned answer instead of raising when no
vendor is configured or the call fails.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import httpx

from app.core.config import settings
from app.services import fallbacks

logger = logging.getLogger(__name__)

Message = Dict[str, str]


class Provider(str, Enum):
    AUTO = "auto"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    DEEPSEEK = "deepseek"
    MOCK = "mock"  # no credentials: answers come from the fallback texts

    @classmethod
    def parse(cls, value) -> "Provider":
        try:
            return cls(value or cls.AUTO)
        except ValueError:
            logger.info("Unknown AI provider '%s', using auto selection", value)
            return cls.AUTO


# Gemini first since it has a free tier
PREFERENCE_ORDER = (Provider.GEMINI, Provider.ANTHROPIC, Provider.DEEPSEEK)


@dataclass(frozen=True)
class AIConfig:
    gemini_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-pro"
    anthropic_model: str = "claude-3-7-sonnet-20250219"
    deepseek_model: str = "deepseek-chat"
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, s) -> "AIConfig":
        return cls(
            gemini_api_key=s.GEMINI_API_KEY or None,
            anthropic_api_key=s.ANTHROPIC_API_KEY or None,
            deepseek_api_key=s.DEEPSEEK_API_KEY or None,
            gemini_model=s.GEMINI_MODEL,
            anthropic_model=s.ANTHROPIC_MODEL,
            deepseek_model=s.DEEPSEEK_MODEL,
            timeout=s.AI_REQUEST_TIMEOUT,
        )

    def credentials(self) -> Dict[Provider, Tuple[Optional[str], str]]:
        return {
            Provider.GEMINI: (self.gemini_api_key, self.gemini_model),
            Provider.ANTHROPIC: (self.anthropic_api_key, self.anthropic_model),
            Provider.DEEPSEEK: (self.deepseek_api_key, self.deepseek_model),
        }


@dataclass(frozen=True)
class Completion:
    text: str
    provider: Provider
    is_fallback: bool = False


class VendorClient:
    """One configured vendor. Subclasses own the wire format."""

    provider: Provider
    url: str

    def __init__(self, api_key: str, model: str, timeout: float, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.transport = transport

    def build_request(self, messages: List[Message], json_format: bool) -> Tuple[str, dict, dict]:
        raise NotImplementedError

    def parse_response(self, data: dict) -> str:
        raise NotImplementedError

    async def complete(self, messages: List[Message], json_format: bool = False) -> str:
        """Calls the vendor. HTTP, transport and decoding errors propagate to the gateway."""
        url, headers, payload = self.build_request(messages, json_format)
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            return self.parse_response(response.json()).strip()


class DeepSeekClient(VendorClient):
    provider = Provider.DEEPSEEK
    url = "https://api.deepseek.com/v1/chat/completions"

    def build_request(self, messages, json_format):
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"model": self.model, "messages": messages}
        if json_format:
            payload["response_format"] = {"type": "json_object"}
        return self.url, headers, payload

    def parse_response(self, data):
        return data["choices"][0]["message"]["content"]


class GeminiClient(VendorClient):
    provider = Provider.GEMINI
    url = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def build_request(self, messages, json_format):
        # No system role: fold it into the first user turn
        system = [m["content"] for m in messages if m["role"] == "system"]
        contents = []
        for m in messages:
            if m["role"] == "system":
                continue
            role = "model" if m["role"] == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": m["content"]}]})
        if system:
            prefix = "\n\n".join(system)
            if contents and contents[0]["role"] == "user":
                contents[0]["parts"][0]["text"] = f"{prefix}\n\n{contents[0]['parts'][0]['text']}"
            else:
                contents.insert(0, {"role": "user", "parts": [{"text": prefix}]})
        if json_format:
            contents[-1]["parts"][0]["text"] += "\n\nPlease format your response as a valid JSON object."

        generation_config = {"temperature": 0.7, "topK": 40, "topP": 0.95, "maxOutputTokens": 1000}
        if json_format:
            generation_config["responseMimeType"] = "application/json"
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        payload = {"contents": contents, "generationConfig": generation_config}
        return self.url.format(model=self.model), headers, payload

    def parse_response(self, data):
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)


class AnthropicClient(VendorClient):
    provider = Provider.ANTHROPIC
    url = "https://api.anthropic.com/v1/messages"
    api_version = "2023-06-01"

    def build_request(self, messages, json_format):
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        turns = [{"role": m["role"], "content": m["content"]} for m in messages if m["role"] != "system"]
        if json_format and turns:
            turns[-1]["content"] += "\n\nRespond only with valid JSON, without markdown or commentary."
        payload = {"model": self.model, "max_tokens": 1000, "temperature": 0.7, "messages": turns}
        if system:
            payload["system"] = system
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "Content-Type": "application/json",
        }
        return self.url, headers, payload

    def parse_response(self, data):
        return "".join(block.get("text", "") for block in data["content"] if block.get("type") == "text")


VENDOR_CLIENTS = {
    Provider.GEMINI: GeminiClient,
    Provider.ANTHROPIC: AnthropicClient,
    Provider.DEEPSEEK: DeepSeekClient,
}


class AIGateway:
    def __init__(self, config: AIConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.clients: Dict[Provider, VendorClient] = {}
        for provider, (api_key, model) in config.credentials().items():
            if api_key:
                self.clients[provider] = VENDOR_CLIENTS[provider](api_key, model, config.timeout, transport)

    def available(self) -> List[Provider]:
        return [p for p in PREFERENCE_ORDER if p in self.clients]

    def resolve(self, requested=Provider.AUTO) -> Provider:
        requested = Provider.parse(requested)
        if requested in (Provider.AUTO, Provider.MOCK):
            available = self.available()
            return available[0] if available else Provider.MOCK
        if requested not in self.clients:
            logger.info("%s API key not available, falling back to auto selection", requested.value)
            return self.resolve(Provider.AUTO)
        return requested

    async def generate(self, messages: List[Message], json_format: bool = False, provider=Provider.AUTO) -> Completion:
        selected = self.resolve(provider)
        logger.debug("Using AI provider: %s", selected.value)
        if selected is Provider.MOCK:
            return Completion(fallbacks.for_request(messages, json_format), Provider.MOCK, is_fallback=True)

        try:
            text = await self.clients[selected].complete(messages, json_format)
        except httpx.HTTPStatusError as http_err:
            if http_err.response.status_code == 402:
                logger.warning("%s API subscription issue: payment required", selected.value)
            else:
                logger.warning("HTTP error from %s API: %s", selected.value, http_err)
            logger.debug("Response body: %s", http_err.response.text)
            text = ""
        except httpx.RequestError as e:
            logger.warning("%s API call failed: %s", selected.value, e)
            text = ""
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning("Could not read %s API response: %s", selected.value, e)
            text = ""

        if not text:
            return Completion(fallbacks.after_error(messages, json_format), selected, is_fallback=True)
        return Completion(text, selected)

    async def complete(self, messages: List[Message], json_format: bool = False, provider=Provider.AUTO) -> str:
        return (await self.generate(messages, json_format, provider)).text


def log_provider_status(gateway: AIGateway) -> None:
    logger.info("AI providers status:")
    for provider in PREFERENCE_ORDER:
        logger.info("- %s: %s", provider.value, "available" if provider in gateway.clients else "not available")


@lru_cache
def get_ai_gateway() -> AIGateway:
    return AIGateway(AIConfig.from_settings(settings))
