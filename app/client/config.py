from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    api_base_url: str = "http://localhost:8000"
    request_timeout: float = 10.0
    notes_autosave_delay: float = 0.5  # seconds of idle typing before notes are saved

    model_config = SettingsConfigDict(env_prefix="CRM_", env_file=".env", extra="ignore")
