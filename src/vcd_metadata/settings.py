"""Client settings via Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class VCDSettings(BaseSettings):
    """vCloud Director connection settings."""

    model_config = SettingsConfigDict(env_prefix="VCD_")

    url: str = "https://localhost/api"
    token: str | None = None
    api_version: str = "36.0"
    timeout: float = 30.0
    verify_ssl: bool = True
    task_poll_interval: float = 2.0
    task_timeout: float = 300.0  # 5 minutes
