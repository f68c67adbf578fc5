from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    openai_api_key: str = ""
    openai_base_url: str = "https://api.groq.com/openai/v1"
    default_model: str = "llama-3.1-8b-instant"
    generator_framework: str = "openai"
    generation_temperature: float = 0.3
    generation_max_tokens: int = 900

    database_path: str = "data/resume_studio.db"
    session_secret: str = "change-me"
    password_rounds: int = 12
    environment: str = "development"
    seed_demo: bool = True

    log_level: str = "INFO"
    log_dir: str | None = None

    export_delay_ms: int = 500
    preview_scale: float = 0.9
    editor_session_ttl_seconds: int = 1800
    max_editor_sessions_per_user: int = 20

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
