from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./degreeplan.db"
    environment: str = "development"
    log_level: str = "INFO"

    # "database" reads the local catalog tables, "http" asks the upstream catalog API
    catalog_source: str = "database"
    catalog_api_url: str = "https://beta.umd.io/v1"
    catalog_timeout_seconds: float = 5.0
    catalog_max_workers: int = 8
    catalog_cache_ttl_seconds: float = 60 * 30
    catalog_cache_capacity: int = 2048

    stub_credits: int = 3
    full_time_credits: int = 12
    heavy_load_credits: int = 20
    graduation_credits: int = 120

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
