from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///motra.db"
    # Timezone used when bucketing workouts into days/months for statistics.
    # Examples: "Asia/Seoul", "Europe/London", or "local" to use system tz.
    timezone: str = "local"

    # Calorie model: ~1 kcal per kg of body weight per km
    body_weight_kg: float = 70.0

    # Tracking session
    tick_interval_s: float = 1.0
    min_sample_distance_m: float | None = None  # None disables the filter
    count_paused_time: bool = False  # True keeps elapsed = now - start

    log_level: str = "INFO"

    # Allow empty env strings for optional fields
    @field_validator("min_sample_distance_m", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    model_config = SettingsConfigDict(env_file=".env")


settings = Settings()
