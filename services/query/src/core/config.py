from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Member service (application validation)
    member_service_url: str = "http://member-service:8080"
    member_validation_path: str = "/api/v1/members/validation"
    member_validation_timeout_seconds: float = 2.0

    # ClickHouse startup
    clickhouse_connect_retries: int = 5
    clickhouse_connect_base_delay: float = 0.5
    clickhouse_connect_max_delay: float = 8.0
    clickhouse_query_timeout_seconds: int = 30

    otel_service_name: str = "query"


settings = Settings()
