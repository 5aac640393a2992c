import os


class Settings:
    """Application settings, read from environment variables on every access."""

    @property
    def app_name(self) -> str:
        return "WNY AI Web Backend"

    @property
    def environment(self) -> str:
        # Railway sets PORT, so treat it as production like ENV=production
        env = os.getenv("ENV", "").lower()
        railway_env = os.getenv("RAILWAY_ENVIRONMENT", "").lower()
        if env == "production" or railway_env == "production" or os.getenv("PORT"):
            return "production"
        return "development"

    @property
    def cors_origin(self) -> str:
        return os.getenv("CORS_ORIGIN", "http://localhost:5173")

    # --- Record store (Airtable) ---

    @property
    def airtable_access_token(self) -> str:
        return os.getenv("AIRTABLE_ACCESS_TOKEN", "")

    @property
    def airtable_api_key(self) -> str:
        return os.getenv("AIRTABLE_API_KEY", "")

    @property
    def airtable_auth_token(self) -> str:
        """Personal access token wins over the legacy API key."""
        return self.airtable_access_token or self.airtable_api_key or "missing_auth_token"

    @property
    def airtable_auth_method(self) -> str:
        if self.airtable_access_token:
            return "access_token"
        if self.airtable_api_key:
            return "api_key"
        return "none"

    @property
    def airtable_base_id(self) -> str:
        return os.getenv("AIRTABLE_BASE_ID") or "missing_base_id"

    @property
    def airtable_api_url(self) -> str:
        return os.getenv("AIRTABLE_API_URL", "https://api.airtable.com/v0")

    @property
    def airtable_timeout(self) -> float:
        try:
            return float(os.getenv("AIRTABLE_TIMEOUT", "10"))
        except ValueError:
            return 10.0

    @property
    def subscribers_table(self) -> str:
        return os.getenv("AIRTABLE_SUBSCRIBERS_TABLE") or "Subscribers"

    @property
    def events_table(self) -> str:
        return os.getenv("AIRTABLE_EVENTS_TABLE") or "Events"

    @property
    def content_table(self) -> str:
        return os.getenv("AIRTABLE_CONTENT_TABLE") or "Site Content"

    @property
    def schedule_table(self) -> str:
        return os.getenv("AIRTABLE_SCHEDULE_TABLE") or "Conference Schedule"

    @property
    def registrations_table(self) -> str:
        return os.getenv("AIRTABLE_REGISTRATIONS_TABLE") or "Conference Registrations"

    @property
    def sponsors_table(self) -> str:
        return os.getenv("AIRTABLE_SPONSORS_TABLE") or "Sponsor Inquiries"

    # --- Site ---

    @property
    def site_timezone(self) -> str:
        return os.getenv("SITE_TIMEZONE", "America/New_York")

    @property
    def debug_routes_enabled(self) -> bool:
        value = os.getenv("DEBUG_ROUTES", "").strip().lower()
        if value:
            return value in ("1", "true", "yes", "on")
        return self.environment != "production"


# Singleton instance (no cache, values are read dynamically)
_settings_instance = None


def get_settings() -> Settings:
    """Return the Settings instance. Environment variables are read on access."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def clear_settings_cache():
    global _settings_instance
    _settings_instance = None
