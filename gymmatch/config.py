from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/gymmatch"
    api_key: str | None = None
    log_level: str = "INFO"

    # Scoring knobs. Weights are fixed at 30/25/20/15/10.
    minimum_match_score: int = 40  # Don't surface candidates below this total
    schedule_full_overlap_minutes: int = 180  # One preset slot (e.g. 06:00-09:00) earns full schedule points
    level_adjacent_ratio: float = 0.5  # beginner<->intermediate, intermediate<->advanced
    # [max_miles, points], nearest first. Beyond the last tier scores 0.
    distance_tiers: list[tuple[float, int]] = [(1.0, 30), (3.0, 20), (5.0, 10), (10.0, 5)]

    # Discovery
    discovery_candidate_limit: int = 50  # Profiles pulled per discovery request
    discovery_page_size: int = 20

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
