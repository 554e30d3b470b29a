from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # API Keys
    anthropic_api_key: str = ""

    # Prepayment suggestions
    suggestion_model: str = "claude-haiku-4-5-20251001"
    suggestion_max_tokens: int = 600

    # CSV export
    csv_filename: str = "home-loan-amortization-schedule.csv"

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
