"""
Redirect Login — The server-side "Login with Facebook" redirect flow.

    helper = fb.get_redirect_login_helper()
    login_url = helper.get_login_url("https://example.com/callback", ["email"])
    # ... user is redirected back to
    # https://example.com/callback?code=AQD...&state=9f2c...
    token = helper.get_access_token(request.url)

A random CSRF "state" is stored in the persistent data handler when the
login URL is built, compared (constant time) with the callback's "state"
and cleared once used.
"""

import hmac
from typing import Any, Dict, Iterable, Optional, Union

from .access_token import AccessToken
from .exceptions import SDKException
from .oauth2_client import OAuth2Client
from .persistent_data import PersistentDataInterface, create_persistent_data_handler
from .random_string import PseudoRandomStringGeneratorInterface, create_pseudo_random_string_generator
from .type_mapping import map_type
from .url_manipulator import build_query, get_params_as_dict, remove_params_from_url

CSRF_LENGTH = 32
LOGOUT_URL = "https://www.facebook.com/logout.php"
CALLBACK_PARAMS = ("code", "enforce_https", "state")


class RedirectLoginHelper:
    """Builds login/logout URLs and turns the callback into an AccessToken."""

    def __init__(
        self,
        oauth2_client: OAuth2Client,
        persistent_data_handler: Optional[PersistentDataInterface] = None,
        pseudo_random_string_generator: Optional[PseudoRandomStringGeneratorInterface] = None,
    ):
        self.oauth2_client = oauth2_client
        self.persistent_data_handler = create_persistent_data_handler(persistent_data_handler)
        self.pseudo_random_string_generator = create_pseudo_random_string_generator(
            pseudo_random_string_generator
        )

    def _make_url(
        self,
        redirect_url: str,
        scope: Iterable[str],
        params: Optional[Dict[str, Any]] = None,
        separator: str = "&",
    ) -> str:
        state = self.persistent_data_handler.get("state") or (
            self.pseudo_random_string_generator.get_pseudo_random_string(CSRF_LENGTH)
        )
        self.persistent_data_handler.set("state", state)

        return self.oauth2_client.get_authorization_url(redirect_url, state, scope, params, separator)

    def get_login_url(self, redirect_url: str, scope: Iterable[str] = (), separator: str = "&") -> str:
        return self._make_url(redirect_url, scope, {}, separator)

    def get_rerequest_url(self, redirect_url: str, scope: Iterable[str] = (), separator: str = "&") -> str:
        """Login URL that asks again for permissions the user declined."""
        return self._make_url(redirect_url, scope, {"auth_type": "rerequest"}, separator)

    def get_reauthentication_url(self, redirect_url: str, scope: Iterable[str] = (), separator: str = "&") -> str:
        """Login URL that makes the user re-enter their password."""
        return self._make_url(redirect_url, scope, {"auth_type": "reauthenticate"}, separator)

    def get_logout_url(self, access_token: Union[AccessToken, str], next_url: str, separator: str = "&") -> str:
        """
        Raises:
            SDKException: (722) for app access tokens.
        """
        if not isinstance(access_token, AccessToken):
            access_token = AccessToken(access_token)

        if access_token.is_app_access_token():
            raise SDKException("Cannot generate a logout URL with an app access token.", 722)

        params = {
            "next": next_url,
            "access_token": access_token.value,
        }
        return f"{LOGOUT_URL}?{build_query(params, separator)}"

    def get_access_token(self, current_url: str, redirect_url: Optional[str] = None) -> Optional[AccessToken]:
        """Exchange the callback's code for a token.

        Args:
            current_url: The full callback URL the user landed on.
            redirect_url: The redirect URL used for the login URL; defaults
                to current_url without the code/state params.

        Returns:
            The AccessToken, or None when the callback carries no code.

        Raises:
            SDKException: When the CSRF state is missing or does not match.
        """
        code = self._get_input(current_url, "code")
        if not code:
            return None

        self._validate_csrf(current_url)
        self._reset_csrf()

        redirect_url = remove_params_from_url(redirect_url or current_url, CALLBACK_PARAMS)

        return self.oauth2_client.get_access_token_from_code(code, redirect_url)

    @staticmethod
    def _get_input(current_url: str, key: str) -> Optional[str]:
        return map_type(get_params_as_dict(current_url).get(key), "str")

    def _validate_csrf(self, current_url: str) -> None:
        state = self._get_input(current_url, "state")
        if not state:
            raise SDKException(
                'Cross-site request forgery validation failed. Required GET param "state" missing.'
            )

        saved_state = self.persistent_data_handler.get("state")
        if not saved_state:
            raise SDKException(
                "Cross-site request forgery validation failed. "
                'Required param "state" missing from persistent data.'
            )

        if not hmac.compare_digest(str(saved_state).encode("utf-8"), state.encode("utf-8")):
            raise SDKException(
                "Cross-site request forgery validation failed. "
                'The "state" param from the URL and session do not match.'
            )

    def _reset_csrf(self) -> None:
        self.persistent_data_handler.set("state", None)

    def get_error_code(self, current_url: str) -> Optional[str]:
        return self._get_input(current_url, "error_code")

    def get_error(self, current_url: str) -> Optional[str]:
        return self._get_input(current_url, "error")

    def get_error_reason(self, current_url: str) -> Optional[str]:
        return self._get_input(current_url, "error_reason")

    def get_error_description(self, current_url: str) -> Optional[str]:
        return self._get_input(current_url, "error_description")
