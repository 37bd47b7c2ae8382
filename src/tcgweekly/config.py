"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings

# Public Pokémon data API and sprite host.
DEFAULT_POKEMON_API_BASE = "https://pokeapi.co/api/v2"
DEFAULT_POKEMON_SPRITES_BASE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon"
)

# Results accepted per week before further submissions are refused.
DEFAULT_WEEKLY_RESULT_CAP = 50


class Settings(BaseSettings):
    """tcgweekly application configuration.

    All values can be overridden via environment variables or .env file.
    """

    # Database
    database_url: str = "sqlite+aiosqlite:///tcgweekly.db"

    # Environment
    tcgweekly_env: str = "development"

    # Shared secret required on every mutating request
    submission_password: str = ""

    # Submissions
    weekly_result_cap: int = DEFAULT_WEEKLY_RESULT_CAP

    # Pokédex lookups
    pokemon_api_base: str = DEFAULT_POKEMON_API_BASE
    pokemon_sprites_base: str = DEFAULT_POKEMON_SPRITES_BASE
    pokemon_search_limit: int = 1500
    pokemon_results_limit: int = 20
    pokemon_api_timeout: float = 10.0

    # Logging
    tcgweekly_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _require_password_in_production(self) -> Settings:
        """Reject a missing submission password in production.

        In development an empty password is allowed, but every mutating
        request is then refused as unauthorized.
        """
        if not self.submission_password and self.tcgweekly_env == "production":
            msg = "SUBMISSION_PASSWORD must be set in production."
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def _strip_trailing_slashes(self) -> Settings:
        self.pokemon_api_base = self.pokemon_api_base.rstrip("/")
        self.pokemon_sprites_base = self.pokemon_sprites_base.rstrip("/")
        return self
