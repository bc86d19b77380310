from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckOracle"
    debug: bool = False

    # SQLite file produced by `python -m deckoracle.jobs.build_catalog`
    card_database_url: str = "sqlite+aiosqlite:///data/arena_standard_cards.sqlite"
    card_language: str = "en"

    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 4000


settings = Settings()


# =============================================================================
# TEXT GENERATION LIMITS
# =============================================================================

# Upper bound on max_tokens regardless of what settings or callers ask for
MAX_TOKENS_CAP = 8000

DEFAULT_ARCHETYPE = "Midrange"
