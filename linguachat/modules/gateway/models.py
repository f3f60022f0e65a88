"""Pydantic models and errors shared by every provider gateway."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, SecretStr


class ProviderKind(str, Enum):
    GROQ = "groq"
    HUGGINGFACE = "huggingface"
    OPENAI = "openai"


# Key prefixes the providers hand out; used for a cheap sanity check only
CREDENTIAL_PREFIXES: dict[ProviderKind, str] = {
    ProviderKind.GROQ: "gsk_",
    ProviderKind.HUGGINGFACE: "hf_",
    ProviderKind.OPENAI: "sk-",
}

DISPLAY_NAMES: dict[ProviderKind, str] = {
    ProviderKind.GROQ: "Groq",
    ProviderKind.HUGGINGFACE: "Hugging Face",
    ProviderKind.OPENAI: "OpenAI",
}


class ProviderConfig(BaseModel):
    """Provider selection for one session."""

    kind: ProviderKind
    credential: SecretStr
    model: Optional[str] = Field(
        default=None, description="Overrides the provider's default chat model"
    )


class LanguagePair(BaseModel):
    source: str = "en"
    target: str = "pl"


class GatewayErrorKind(str, Enum):
    NETWORK = "network"
    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    MALFORMED_RESPONSE = "malformed_response"


class GatewayError(Exception):
    """Raised when a provider call fails; carries the raw status/body."""

    def __init__(
        self,
        kind: GatewayErrorKind,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.body = body


class NotConfiguredError(Exception):
    """No provider, or a credential that fails validation."""


def validate_credential(kind: ProviderKind, credential: str) -> str:
    key = (credential or "").strip()
    if not key:
        raise NotConfiguredError("API key is required")
    prefix = CREDENTIAL_PREFIXES[kind]
    if not key.startswith(prefix):
        raise NotConfiguredError(
            f"{DISPLAY_NAMES[kind]} API key should start with '{prefix}'"
        )
    return key
