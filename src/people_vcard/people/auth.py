"""OAuth2 credentials for read-only Google People API access."""

from __future__ import annotations

import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

from people_vcard.exceptions import PeopleAuthError

logger = logging.getLogger(__name__)

# If modifying these scopes, delete the saved token file.
SCOPES = ["https://www.googleapis.com/auth/contacts.readonly"]


class AuthManager:
    """Loads, refreshes and persists the OAuth2 token for the People API.

    Accepts primitives only.

    Args:
        token_file: Where the authorized-user token JSON is stored.
        client_secret_file: Path to the client secrets JSON.
        scopes: OAuth2 scopes to request. Defaults to read-only contacts.
    """

    def __init__(
        self,
        token_file: Path,
        client_secret_file: Path,
        scopes: list[str] | None = None,
    ):
        self.scopes = scopes or list(SCOPES)
        self._token_file = Path(token_file)
        self._client_secret = Path(client_secret_file)

    def authorize(self) -> Credentials:
        """Run the interactive installed-app flow. Opens a browser."""
        if not self._client_secret.exists():
            raise PeopleAuthError(
                f"Client secret not found at {self._client_secret}. "
                "Download it from Google Cloud Console and place it there."
            )

        flow = InstalledAppFlow.from_client_secrets_file(
            str(self._client_secret), self.scopes,
        )
        creds = flow.run_local_server(port=0)
        self._save(creds)
        return creds

    def get_credentials(self) -> Credentials:
        """Load the saved token, refreshing it or authorizing anew as needed."""
        if not self._token_file.exists():
            logger.info(f"No token at {self._token_file}, starting authorization")
            return self.authorize()

        try:
            creds = Credentials.from_authorized_user_file(
                str(self._token_file), self.scopes,
            )
        except ValueError as e:
            raise PeopleAuthError(f"Token file {self._token_file} is unreadable: {e}") from e

        if creds.expired and creds.refresh_token:
            creds.refresh(Request())
            self._save(creds)

        if not creds.valid:
            raise PeopleAuthError(
                f"Token at {self._token_file} is invalid. "
                "Remove it and authorize again."
            )

        return creds

    def get_people_service(self) -> Resource:
        """Return an authenticated People API service."""
        creds = self.get_credentials()
        return build("people", "v1", credentials=creds, cache_discovery=False)

    def remove_token(self) -> bool:
        """Delete the token file. Returns True if deleted."""
        if self._token_file.exists():
            self._token_file.unlink()
            return True
        return False

    def has_token(self) -> bool:
        return self._token_file.exists()

    def _save(self, creds: Credentials) -> None:
        logger.info(f"Saving credential file to {self._token_file}")
        self._token_file.parent.mkdir(parents=True, exist_ok=True)
        self._token_file.write_text(creds.to_json())
