from __future__ import annotations

from typing import Optional

import httpx

from linguachat.modules.gateway.base import ProviderGateway
from linguachat.modules.gateway.chat_completions import GroqGateway, OpenAIGateway
from linguachat.modules.gateway.huggingface import HuggingFaceGateway
from linguachat.modules.gateway.models import ProviderKind

GATEWAYS: dict[ProviderKind, type[ProviderGateway]] = {
    ProviderKind.GROQ: GroqGateway,
    ProviderKind.HUGGINGFACE: HuggingFaceGateway,
    ProviderKind.OPENAI: OpenAIGateway,
}


def gateway_for(
    kind: ProviderKind, *, client: Optional[httpx.AsyncClient] = None
) -> ProviderGateway:
    """Build the gateway variant for a provider kind."""
    try:
        gateway_cls = GATEWAYS[ProviderKind(kind)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported provider: {kind}")
    return gateway_cls(client=client)
