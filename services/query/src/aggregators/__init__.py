from .abnormal import latest_abnormal_flag
from .distribution import url_distribution
from .response_time import average_response_time

__all__ = ["average_response_time", "url_distribution", "latest_abnormal_flag"]
