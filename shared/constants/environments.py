from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    PRODUCTION = "production"
    STAGING = "staging"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def uses_plain_logs(cls, env: str) -> bool:
        """Development and testing log human-readable lines instead of JSON."""
        return env.lower() in (cls.DEVELOPMENT.value, cls.TESTING.value)
