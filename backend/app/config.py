"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    crochetchart_env: str = "development"
    crochetchart_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Generation defaults
    default_max_colors: int = 6

    # Request bounds
    min_grid_size: int = 10
    max_grid_size: int = 100
    min_max_colors: int = 2
    max_max_colors: int = 20
    max_upload_bytes: int = 10 * 1024 * 1024

    # PNG export geometry
    export_cell_size: int = 20
    export_padding: int = 40
    export_legend_height: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
