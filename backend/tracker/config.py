from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "JobTracker"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    # Insert the demo applications on startup when the store is empty.
    seed_demo_data: bool = False
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]

    @property
    def db_path(self) -> Path:
        return self.data_path / "db.sqlite"

    model_config = {"env_prefix": "TRACKER_"}


settings = Settings()
