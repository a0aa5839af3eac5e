"""Profile view logic: account display and the edit form."""

from dataclasses import dataclass
from typing import Any

from src.utils.logging import get_logger
from src.vault_api import User, VaultClient

logger = get_logger(__name__)

DEFAULT_AVATAR_COLOR = "#1DB954"

# Form field -> API key
FORM_FIELDS = {
    "full_name": "fullName",
    "username": "username",
    "email": "email",
    "phone": "phone",
}


def user_initials(user: User) -> str:
    """Up to two initials from the full name, else from the username."""
    if user.full_name:
        return "".join(part[0] for part in user.full_name.split() if part).upper()[:2]
    return user.username[:2].upper()


def avatar_color(user: User) -> str:
    return user.avatar_color or DEFAULT_AVATAR_COLOR


@dataclass
class ProfileForm:
    """Editable account fields.

    Every field except ``password`` is sent as-is, so an empty string clears
    the stored value. A blank password keeps the current one.
    """

    full_name: str = ""
    username: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""

    @classmethod
    def from_user(cls, user: User) -> "ProfileForm":
        return cls(
            full_name=user.full_name or "",
            username=user.username,
            email=user.email or "",
            phone=user.phone or "",
        )

    def to_payload(self) -> dict[str, Any]:
        payload = {api_key: getattr(self, field) for field, api_key in FORM_FIELDS.items()}
        if self.password:
            payload["password"] = self.password
        return payload


class ProfileEditor:
    """Loads the signed-in user and submits profile edits."""

    def __init__(self, client: VaultClient) -> None:
        self.client = client
        self.user: User | None = None

    async def load(self, refresh: bool = False) -> User:
        self.user = await self.client.get_current_user(refresh=refresh)
        return self.user

    def edit_form(self) -> ProfileForm:
        """Start an edit from the last fetched user."""
        if self.user is None:
            return ProfileForm()
        return ProfileForm.from_user(self.user)

    async def submit(self, form: ProfileForm) -> User:
        """Send the form and reload the account.

        Returns:
            The user as stored after the update
        """
        await self.client.update_current_user(form.to_payload())
        logger.info("profile_form_submitted", password_changed=bool(form.password))
        return await self.load()
