from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    supabase_url: str
    supabase_key: str
    log_level: str = "INFO"
    request_timeout: float = 30.0
    availability_window_days: int = 90
    # Bookings are trusted as sent by the client unless this is enabled
    verify_availability_on_create: bool = False
