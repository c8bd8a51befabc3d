"""
Domain-specific errors for the accounts bounded context.

These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class AccountsDomainError(Exception):
    """Base error for all accounts domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UserNotFoundError(AccountsDomainError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class UsernameTakenError(AccountsDomainError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already taken: {username}")
        self.username = username


class WatchlistItemExistsError(AccountsDomainError):
    """Raised when a user adds a symbol already on their watchlist."""

    def __init__(self, user_id: str, symbol: str) -> None:
        super().__init__(f"{symbol} is already on the watchlist of {user_id}")
        self.user_id = user_id
        self.symbol = symbol


class WatchlistItemNotFoundError(AccountsDomainError):
    """Raised when removing a symbol that is not on the watchlist."""

    def __init__(self, user_id: str, symbol: str) -> None:
        super().__init__(f"Item not found in watchlist: {symbol}")
        self.user_id = user_id
        self.symbol = symbol


class AlertNotFoundError(AccountsDomainError):
    """Raised when an alert cannot be found."""

    def __init__(self, alert_id: str) -> None:
        super().__init__(f"Alert not found: {alert_id}")
        self.alert_id = alert_id
