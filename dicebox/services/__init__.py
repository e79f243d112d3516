"""业务服务层"""
from .roll import Accepted, Rejected, RollOutcome, RollService

__all__ = [
    "RollService",
    "RollOutcome",
    "Accepted",
    "Rejected",
]
