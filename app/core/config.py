from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./catalog_sync.db"
    log_level: str = "INFO"

    # WooCommerce REST API used to resolve product records
    wc_base_url: str = "https://host.docker.internal"
    wc_consumer_key: str = ""
    wc_consumer_secret: str = ""
    wc_api_version: str = "wc/v3"
    wc_request_timeout: int = 30
    wc_verify_ssl: bool = True

    # WordPress database (brand taxonomy lookups)
    wp_database_url: Optional[str] = None
    wp_table_prefix: str = "wp_"
    placeholder_image_url: str = (
        "https://host.docker.internal/wp-content/uploads/woocommerce-placeholder.png"
    )

    # Transient per-product memory kept between hook firings
    reactor_state_backend: str = "memory"
    reactor_state_ttl_seconds: int = 300
    reactor_state_max_entries: int = 10000
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0

    class Config:
        env_file = "../.env"


settings = Settings()
