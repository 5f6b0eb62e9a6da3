"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", case_sensitive=False, populate_by_name=True
    )

    database_url: str = Field("sqlite:///data/newsnexus.db", alias="DATABASE_URL")
    name_app: str = Field("NewsNexusLlmArticleAnalyzer04", alias="NAME_APP")
    target_approved_article_count: int = Field(0, alias="TARGET_APPROVED_ARTICLE_COUNT")
    semantic_scorer_name: str = Field("NewsNexusSemanticScorer02", alias="SEMANTIC_SCORER_NAME")
    keyword_rating_threshold: float = Field(0.4, alias="KEYWORD_RATING_THRESHOLD")
    openai_api_key: str = Field("", alias="OPENAI_API_KEY")
    llm_base_url: str = Field("https://api.openai.com/v1", alias="LLM_BASE_URL")
    llm_model: str = Field("gpt-4o-mini", alias="LLM_MODEL")
    llm_max_tokens: int = Field(1000, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(60.0, alias="LLM_TIMEOUT_SECONDS")
    scrape_timeout_seconds: float = Field(10.0, alias="SCRAPE_TIMEOUT_SECONDS")
    scrape_user_agent: str = Field(
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0 Safari/537.36",
        alias="SCRAPE_USER_AGENT",
    )
    prompt_template_path: Path | None = Field(default=None, alias="PROMPT_TEMPLATE_PATH")
    log_file_path: Path = Field(
        default_factory=lambda: Path("microservice-output.log"), alias="LOG_FILE_PATH"
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
