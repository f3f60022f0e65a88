from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="linguachat", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class GroqSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(
        default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL"
    )
    chat_model: str = Field(default="llama3-8b-8192", alias="GROQ_CHAT_MODEL")
    max_tokens: int = Field(default=500, alias="GROQ_MAX_TOKENS")
    temperature: float = Field(default=0.7, alias="GROQ_TEMPERATURE")
    translate_max_tokens: int = Field(default=50, alias="GROQ_TRANSLATE_MAX_TOKENS")
    translate_temperature: float = Field(
        default=0.3, alias="GROQ_TRANSLATE_TEMPERATURE"
    )
    history_window: int = Field(default=10, alias="GROQ_HISTORY_WINDOW")


class OpenAISettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    chat_model: str = Field(default="gpt-4o-mini", alias="OPENAI_CHAT_MODEL")
    max_tokens: int = Field(default=500, alias="OPENAI_MAX_TOKENS")
    temperature: float = Field(default=0.7, alias="OPENAI_TEMPERATURE")
    translate_max_tokens: int = Field(
        default=50, alias="OPENAI_TRANSLATE_MAX_TOKENS"
    )
    translate_temperature: float = Field(
        default=0.3, alias="OPENAI_TRANSLATE_TEMPERATURE"
    )
    history_window: int = Field(default=10, alias="OPENAI_HISTORY_WINDOW")


class HuggingFaceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(
        default="https://api-inference.huggingface.co/models", alias="HF_BASE_URL"
    )
    chat_model: str = Field(default="microsoft/DialoGPT-medium", alias="HF_CHAT_MODEL")
    # {source}/{target} are filled from the session's language pair
    translation_model: str = Field(
        default="Helsinki-NLP/opus-mt-{source}-{target}", alias="HF_TRANSLATION_MODEL"
    )
    max_new_tokens: int = Field(default=150, alias="HF_MAX_NEW_TOKENS")
    temperature: float = Field(default=0.7, alias="HF_TEMPERATURE")
    history_window: int = Field(default=6, alias="HF_HISTORY_WINDOW")


class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    timeout_seconds: float = Field(default=30.0, alias="GATEWAY_TIMEOUT_SECONDS")
    system_prompt: str = Field(
        default=(
            "You are a helpful language-learning assistant. Answer briefly and "
            "helpfully. Help the learner with grammar, vocabulary and conversation."
        ),
        alias="SYSTEM_PROMPT",
    )
    translation_prompt: str = Field(
        default=(
            "You are a translator. Reply with the translation of the word from "
            "{source} into {target} only, without any explanation."
        ),
        alias="TRANSLATION_PROMPT",
    )
    source_language: str = Field(default="en", alias="SOURCE_LANGUAGE")
    target_language: str = Field(default="pl", alias="TARGET_LANGUAGE")


class SessionSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    idle_seconds: int = Field(default=1800, alias="SESSION_IDLE_SECONDS")
    sweep_interval: int = Field(default=60, alias="SESSION_SWEEP_INTERVAL")
    speech_output: bool = Field(default=True, alias="SESSION_SPEECH_OUTPUT")
    greeting: Optional[str] = Field(
        default=(
            "Hi! I am your language-learning assistant, running on {provider}. "
            "How can I help you?"
        ),
        alias="SESSION_GREETING",
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    gateway: GatewaySettings = Field(default_factory=lambda: GatewaySettings())
    session: SessionSettings = Field(default_factory=lambda: SessionSettings())
    groq: GroqSettings = Field(default_factory=lambda: GroqSettings())
    openai: OpenAISettings = Field(default_factory=lambda: OpenAISettings())
    huggingface: HuggingFaceSettings = Field(
        default_factory=lambda: HuggingFaceSettings()
    )


settings = Settings()
