import pytest

from linguachat.modules.gateway import (
    GroqGateway,
    HuggingFaceGateway,
    NotConfiguredError,
    OpenAIGateway,
    ProviderKind,
    gateway_for,
    validate_credential,
)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ProviderKind.GROQ, GroqGateway),
        (ProviderKind.HUGGINGFACE, HuggingFaceGateway),
        (ProviderKind.OPENAI, OpenAIGateway),
        ("groq", GroqGateway),
    ],
)
def test_gateway_for_selects_variant_by_kind(kind, expected):
    gateway = gateway_for(kind)

    assert isinstance(gateway, expected)
    assert gateway.kind == ProviderKind(kind)


def test_gateway_for_unknown_kind():
    with pytest.raises(ValueError):
        gateway_for("anthropic")  # type: ignore[arg-type]


def test_history_window_defaults_differ_per_provider():
    assert gateway_for(ProviderKind.GROQ).history_window == 10
    assert gateway_for(ProviderKind.OPENAI).history_window == 10
    assert gateway_for(ProviderKind.HUGGINGFACE).history_window == 6


@pytest.mark.parametrize(
    "kind, key",
    [
        (ProviderKind.GROQ, "gsk_abc"),
        (ProviderKind.HUGGINGFACE, "hf_abc"),
        (ProviderKind.OPENAI, "sk-abc"),
    ],
)
def test_validate_credential_accepts_provider_prefix(kind, key):
    assert validate_credential(kind, f"  {key}  ") == key


@pytest.mark.parametrize(
    "kind, key",
    [
        (ProviderKind.GROQ, ""),
        (ProviderKind.GROQ, "   "),
        (ProviderKind.GROQ, "hf_abc"),
        (ProviderKind.HUGGINGFACE, "gsk_abc"),
        (ProviderKind.OPENAI, "gsk_abc"),
    ],
)
def test_validate_credential_rejects_bad_keys(kind, key):
    with pytest.raises(NotConfiguredError):
        validate_credential(kind, key)
