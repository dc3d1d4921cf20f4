"""Player accounts kept as ``username password`` lines in a text file."""

from __future__ import annotations

from pathlib import Path

DEFAULT_USERS_FILE = Path("users.txt")


class AccountError(Exception):
    """Raised when logging in or registering fails."""


class UserStore:
    """A plain-text file of users, one ``username password`` per line."""

    def __init__(self, path: str | Path = DEFAULT_USERS_FILE) -> None:
        self.path = Path(path)

    def verify(self, username: str, password: str) -> bool:
        """True if a line holds exactly this username and password.

        A file that is missing or cannot be read holds no users.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError:
            return False
        for line in text.splitlines():
            parts = line.split(" ")
            if len(parts) == 2 and parts[0] == username and parts[1] == password:
                return True
        return False

    def create(self, username: str, password: str) -> bool:
        """Append a user; False if this username and password already exist."""
        if self.verify(username, password):
            return False
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(f"{username} {password}\n")
        except OSError as exc:
            raise AccountError("Cannot create the accounts file!") from exc
        return True


def login(store: UserStore, username: str, password: str) -> str:
    """Check credentials and return the trimmed username."""
    username = username.strip()
    if not username or not password:
        raise AccountError("Please enter a username and a password!")
    if not store.verify(username, password):
        raise AccountError("Wrong username or password!")
    return username


def register(store: UserStore, username: str, password: str, confirm: str) -> str:
    """Create an account and return the trimmed username."""
    username = username.strip()
    if not username or not password:
        raise AccountError("Username and password must not be empty!")
    if password != confirm:
        raise AccountError("The two passwords do not match!")
    if not store.create(username, password):
        raise AccountError("Username already exists!")
    return username