from .environments import Environment
from .measurements import Fields, Measurement

__all__ = ["Environment", "Measurement", "Fields"]
