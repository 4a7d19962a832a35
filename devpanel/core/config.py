from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_ENV: str = "development"
    LOG_LEVEL: str = "info"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://panel.example.org,https://admin.example.org"
    CORS_ORIGINS: str = "*"

    # Used only when no stored settings document exists yet.
    DEFAULT_CATEGORIES: str = "Personal Tasks,Shared Space,Education,General Attitude"
    # Comma-separated "days:name" pairs.
    DEFAULT_PERIODS: str = "6:6-Day Achievement,12:12-Day Achievement"
    DEFAULT_THRESHOLD: float = 1.5

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def default_categories_list(self) -> list[str]:
        return [c.strip() for c in self.DEFAULT_CATEGORIES.split(",") if c.strip()]

    @property
    def default_periods_list(self) -> list[tuple[int, str]]:
        periods = []
        for item in self.DEFAULT_PERIODS.split(","):
            days, _, name = item.strip().partition(":")
            if not days.strip():
                continue
            periods.append((int(days), name.strip() or f"{days.strip()}-Day"))
        return periods


settings = Settings()
