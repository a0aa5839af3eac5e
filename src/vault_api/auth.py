"""Session credential storage for the SoundVault backend."""

import keyring
import keyring.errors

from src.utils.logging import get_logger

logger = get_logger(__name__)

KEYRING_SERVICE = "soundvault"
KEYRING_SESSION_KEY = "session_cookie"


class SessionStore:
    """Keeps the backend session cookie in the system keychain."""

    def __init__(self, cookie_name: str = "connect.sid") -> None:
        """Initialize the store.

        Args:
            cookie_name: Name of the session cookie the backend issues
        """
        self.cookie_name = cookie_name

    @staticmethod
    def get_session() -> str | None:
        """Retrieve the session cookie value from the keychain."""
        try:
            value = keyring.get_password(KEYRING_SERVICE, KEYRING_SESSION_KEY)
            if value:
                logger.debug("session_retrieved_from_keychain")
            return value
        except keyring.errors.KeyringError as e:
            logger.error("keychain_access_error", error=str(e))
            return None

    @staticmethod
    def store_session(value: str) -> None:
        """Store the session cookie value in the keychain.

        Args:
            value: Cookie value copied from a signed-in browser session
        """
        try:
            keyring.set_password(KEYRING_SERVICE, KEYRING_SESSION_KEY, value)
            logger.info("session_stored_in_keychain")
        except keyring.errors.KeyringError as e:
            logger.error("keychain_store_error", error=str(e))
            raise

    @staticmethod
    def delete_session() -> None:
        """Remove the session cookie from the keychain."""
        try:
            keyring.delete_password(KEYRING_SERVICE, KEYRING_SESSION_KEY)
            logger.info("session_deleted_from_keychain")
        except keyring.errors.PasswordDeleteError:
            pass  # nothing stored
        except keyring.errors.KeyringError as e:
            logger.error("keychain_delete_error", error=str(e))

    @staticmethod
    def has_session() -> bool:
        return SessionStore.get_session() is not None

    def get_cookies(self) -> dict[str, str]:
        """Get cookies for credentialed API requests."""
        value = self.get_session()
        return {self.cookie_name: value} if value else {}
