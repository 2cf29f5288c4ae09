from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Incident Reporting Auth API"
    environment: str = "development"
    port: int = 3000
    allowed_origins: str = "*"

    @property
    def parsed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    # Supabase settings
    supabase_url: str
    supabase_anon_key: str
    supabase_timeout: float = 10.0
    users_table: str = "users"

    # Credential and phone settings
    bcrypt_rounds: int = 10
    default_phone_region: str = "US"

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
