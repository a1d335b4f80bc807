from enum import Enum


class Measurement(str, Enum):
    """Logical streams stored in the events table."""

    DATA = "data"
    ABNORMAL = "abnormal"


class Fields:
    """Centralised tag, field and column names of stored points"""

    # Tags
    APPLICATION_TOKEN = "applicationToken"
    BEFORE_URL = "beforeUrl"
    CURRENT_URL = "currentUrl"

    # Fields
    RESPONSE_TIME = "responseTime"
    IS_READ = "isRead"
    CREATE_TIME = "createTime"  # legacy name of the abnormal marker

    # Result columns
    TIME = "_time"
    FIELD = "_field"
    VALUE = "_value"
