from .account_code import AccountCode
from .user import User, UserPreference

__all__ = [
    "AccountCode",
    "User",
    "UserPreference",
]
