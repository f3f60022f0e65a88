"""Gateway module exports."""

from .models import (
    GatewayError,
    GatewayErrorKind,
    LanguagePair,
    NotConfiguredError,
    ProviderConfig,
    ProviderKind,
    validate_credential,
)
from .base import ProviderGateway
from .chat_completions import ChatCompletionsGateway, GroqGateway, OpenAIGateway
from .huggingface import HuggingFaceGateway
from .factory import gateway_for

__all__ = [
    "GatewayError",
    "GatewayErrorKind",
    "LanguagePair",
    "NotConfiguredError",
    "ProviderConfig",
    "ProviderKind",
    "validate_credential",
    "ProviderGateway",
    "ChatCompletionsGateway",
    "GroqGateway",
    "OpenAIGateway",
    "HuggingFaceGateway",
    "gateway_for",
]
