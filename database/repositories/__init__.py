from .baseline_repo import BaselineRepositoryDB
from .insights_repo import InsightsRepositoryDB
from .round_repo import RoundRepositoryDB
from .user_repo import UserRepositoryDB

__all__ = ["BaselineRepositoryDB", "InsightsRepositoryDB", "RoundRepositoryDB", "UserRepositoryDB"]
