from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = "Restaurant Swipe API"
    api_prefix: str = "/api"
    port: int = 3001
    log_level: str = "INFO"

    # Google Maps API key for the Nearby Search proxy.
    # GOOGLE_MAPS_API_KEY is preferred; GOOGLE_API_KEY is accepted for older .env files.
    # No default: without a key every request is served from the fallback dataset.
    google_maps_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_MAPS_API_KEY", "GOOGLE_API_KEY"),
    )

    # Serve the static fallback dataset without calling Google at all
    use_fallback_data: bool = False

    # Nearby Search parameters (fixed per request, not client-controlled)
    places_search_radius_m: int = 1500
    places_type: str = "restaurant"
    places_request_timeout: float = 10.0

    # Optional breakfast/lunch/dinner name filter, off unless explicitly enabled
    meal_filter_enabled: bool = False

    # CORS origins allowed to call the API (the swipe UI runs on a different port)
    cors_allow_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
        populate_by_name=True,
    )


settings = Settings()
