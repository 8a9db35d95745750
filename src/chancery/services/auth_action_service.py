"""Handling of auth-provider email links (verify email, reset password)."""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

from src.chancery.backend.auth import AuthProvider
from src.chancery.core.config import get_settings, is_allowed_host
from src.chancery.core.exceptions import ActionCodeError
from src.chancery.core.logging import get_logger
from src.chancery.core.navigation import Navigation
from src.chancery.models.enums import ActionCodeErrorKind, ActionMode

logger = get_logger(__name__)

MISSING_CODE_MESSAGE = "Invalid verification link. Please request a new verification email."
VERIFIED_MESSAGE = "Your email has been verified successfully!"
UNKNOWN_MODE_MESSAGE = "Unknown action type. Please try again."
RESET_REDIRECT_MESSAGE = "Redirecting to password reset."

ACTION_ERROR_MESSAGES: dict[ActionCodeErrorKind, str] = {
    ActionCodeErrorKind.EXPIRED: "This verification link has expired. Please request a new one.",
    ActionCodeErrorKind.INVALID: "This verification link is invalid or has already been used.",
    ActionCodeErrorKind.DISABLED: "This account has been disabled. Please contact support.",
    ActionCodeErrorKind.UNKNOWN: "An error occurred while verifying your email. Please try again.",
}


class ActionStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class AuthActionResult:
    status: ActionStatus
    message: str
    email: str | None = None
    navigation: Navigation | None = None


def is_safe_continue_url(url: str) -> bool:
    """Same-site relative paths, or absolute http(s) URLs on an allowed host."""
    # Browsers read a backslash as a slash and drop tabs and newlines
    if "\\" in url or any(ord(char) < 0x20 for char in url):
        return False
    parsed = urlparse(url)
    if url.startswith("/") and not url.startswith("//"):
        return not parsed.netloc
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    return is_allowed_host(parsed.hostname, get_settings().allowed_continue_url_domains)


class AuthActionService:
    """Resolves an action link into a result the page renders."""

    def __init__(self, auth: AuthProvider):
        self.auth = auth

    async def handle(
        self,
        mode: str | None,
        code: str | None,
        continue_url: str | None = None,
    ) -> AuthActionResult:
        """Handle one callback. Single attempt; the user requests a new link on failure."""
        if not code:
            return AuthActionResult(status=ActionStatus.ERROR, message=MISSING_CODE_MESSAGE)

        if mode == ActionMode.VERIFY_EMAIL.value:
            return await self._verify_email(code, continue_url)

        if mode == ActionMode.RESET_PASSWORD.value:
            # The code is forwarded as-is; the reset page consumes it
            settings = get_settings()
            return AuthActionResult(
                status=ActionStatus.REDIRECT,
                message=RESET_REDIRECT_MESSAGE,
                navigation=Navigation(route=f"{settings.reset_password_route}?oobCode={code}"),
            )

        logger.info("Unknown auth action mode", mode=mode)
        return AuthActionResult(status=ActionStatus.ERROR, message=UNKNOWN_MODE_MESSAGE)

    async def _verify_email(self, code: str, continue_url: str | None) -> AuthActionResult:
        settings = get_settings()
        try:
            email = await self.auth.verify_email_code(code)
        except ActionCodeError as e:
            logger.info("Verification code rejected", kind=e.kind.value)
            return AuthActionResult(status=ActionStatus.ERROR, message=ACTION_ERROR_MESSAGES[e.kind])

        route = settings.email_verified_route
        if continue_url:
            if is_safe_continue_url(continue_url):
                route = continue_url
            else:
                logger.warning("Ignoring disallowed continueUrl", continue_url=continue_url)

        return AuthActionResult(
            status=ActionStatus.SUCCESS,
            message=VERIFIED_MESSAGE,
            email=email,
            navigation=Navigation(
                route=route,
                delay_seconds=settings.verify_email_redirect_seconds,
            ),
        )

    async def resend_verification(self, email: str, continue_url: str | None = None) -> None:
        """Ask the provider for a fresh link.

        Callers answer the same way whether or not the email exists.
        """
        if continue_url and not is_safe_continue_url(continue_url):
            logger.warning("Ignoring disallowed continueUrl", continue_url=continue_url)
            continue_url = None
        await self.auth.send_email_verification(email, continue_url)

    async def send_password_reset(self, email: str) -> None:
        """Ask the provider for a password reset link. Same caller contract as resend."""
        await self.auth.send_password_reset(email)
