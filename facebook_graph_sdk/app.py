"""
Facebook App — The app ID/secret pair every request is signed with.
"""

from typing import Any, Dict, Union

from .access_token import AccessToken


class FacebookApp:
    """An app registered in the Facebook App Dashboard.

    Attributes:
        id: The app ID (always stored as a string).
        secret: The app secret.
    """

    def __init__(self, app_id: Union[str, int], secret: str):
        self.id = str(app_id)
        self.secret = secret

    @property
    def access_token(self) -> AccessToken:
        """The app access token: "{app_id}|{app_secret}"."""
        return AccessToken(f"{self.id}|{self.secret}")

    def serialize(self) -> str:
        return f"{self.id}|{self.secret}"

    @classmethod
    def unserialize(cls, serialized: str) -> "FacebookApp":
        app_id, secret = serialized.split("|", 1)
        return cls(app_id, secret)

    def __getstate__(self) -> Dict[str, Any]:
        return {"id": self.id, "secret": self.secret}

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.id = state["id"]
        self.secret = state["secret"]

    def __repr__(self) -> str:
        return f"FacebookApp(id={self.id!r})"
