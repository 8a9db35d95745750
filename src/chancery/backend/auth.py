"""Authentication provider port and the local, store-backed adapter.

The workflow only needs a handful of provider calls: create an account,
sign in, resolve a session, and the email action codes behind verification
and password-reset links. ``LocalAuthProvider`` implements them on top of a
``DocumentStore`` with argon2 password hashes and JWT session tokens. It does
not deliver email; action links are logged and kept in ``outbox``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from urllib.parse import urlencode
from uuid import uuid4

from src.chancery.backend.store import (
    DocumentExistsError,
    DocumentStore,
    DocumentStoreError,
    PreconditionFailedError,
)
from src.chancery.core.config import get_settings
from src.chancery.core.exceptions import ActionCodeError, ProviderError
from src.chancery.core.logging import get_logger
from src.chancery.core.security import (
    create_session_token,
    decode_token,
    generate_action_code,
    hash_password,
    hash_token,
    is_valid_email,
    verify_password,
)
from src.chancery.core.security.crypto import SESSION_TOKEN_TYPE
from src.chancery.models.base import utc_now
from src.chancery.models.enums import ActionCodeErrorKind, ActionMode, ProviderErrorCode
from src.chancery.models.session import SessionUser

logger = get_logger(__name__)

ACCOUNTS = "auth_accounts"
EMAIL_INDEX = "auth_emails"
ACTION_CODES = "auth_action_codes"

DUPLICATE_EMAIL_MESSAGE = (
    "This email is already registered. If you previously submitted a registration, "
    "please wait for approval. Otherwise, try logging in or contact the diocese administrator."
)
WEAK_PASSWORD_MESSAGE = "Password is too weak. Please use at least 6 characters."
INVALID_EMAIL_MESSAGE = "Invalid email format. Please check your email address."
UNKNOWN_FAILURE_MESSAGE = "Registration failed. Please try again later."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."
USER_DISABLED_MESSAGE = "This account has been disabled. Please contact support."


class AuthProvider(Protocol):
    """External authentication service."""

    async def create_account(self, email: str, password: str) -> str:
        """Create a credential and return its uid. Raises ProviderError."""
        ...

    async def sign_in(self, email: str, password: str) -> SessionUser: ...

    async def issue_session(self, uid: str) -> str: ...

    async def resolve_session(self, token: str) -> SessionUser | None: ...

    async def send_email_verification(self, email: str, continue_url: str | None = None) -> None:
        ...

    async def send_password_reset(self, email: str) -> None: ...

    async def verify_email_code(self, code: str) -> str:
        """Consume a verifyEmail code and return the verified email. Raises ActionCodeError."""
        ...

    async def disable_account(self, uid: str) -> None: ...


@dataclass(frozen=True)
class SentAction:
    """An action link the provider would have emailed."""

    mode: ActionMode
    email: str
    code: str
    link: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


class LocalAuthProvider:
    """AuthProvider backed by the document store."""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.outbox: list[SentAction] = []

    async def create_account(self, email: str, password: str) -> str:
        settings = get_settings()
        email = normalize_email(email)

        if not is_valid_email(email):
            raise ProviderError(ProviderErrorCode.INVALID_EMAIL, INVALID_EMAIL_MESSAGE)
        if len(password) < settings.min_provider_password_length:
            raise ProviderError(ProviderErrorCode.WEAK_PASSWORD, WEAK_PASSWORD_MESSAGE)

        uid = uuid4().hex
        try:
            # The email index doubles as the uniqueness guard
            await self.store.create(EMAIL_INDEX, email, {"uid": uid})
        except DocumentExistsError as e:
            raise ProviderError(
                ProviderErrorCode.EMAIL_ALREADY_IN_USE, DUPLICATE_EMAIL_MESSAGE
            ) from e
        except DocumentStoreError as e:
            logger.error("Account creation failed", error=str(e))
            raise ProviderError(ProviderErrorCode.UNKNOWN, UNKNOWN_FAILURE_MESSAGE) from e

        try:
            await self.store.create(
                ACCOUNTS,
                uid,
                {
                    "uid": uid,
                    "email": email,
                    "password_hash": hash_password(password),
                    "email_verified": False,
                    "disabled": False,
                    "created_at": utc_now().isoformat(),
                },
            )
        except Exception as e:
            logger.error("Account creation failed", uid=uid, error=str(e))
            await self._release_email(email, uid)
            raise ProviderError(ProviderErrorCode.UNKNOWN, UNKNOWN_FAILURE_MESSAGE) from e

        logger.info("Account created", uid=uid)
        return uid

    async def _release_email(self, email: str, uid: str) -> None:
        """Drop an email reservation left by a failed account write."""
        try:
            await self.store.delete(EMAIL_INDEX, email, expected={"uid": uid})
        except DocumentStoreError as e:
            logger.error("Email reservation not released", uid=uid, error=str(e))

    async def _account_for_email(self, email: str) -> dict | None:
        index = await self.store.get(EMAIL_INDEX, normalize_email(email))
        if index is None:
            return None
        return await self.store.get(ACCOUNTS, index["uid"])

    async def sign_in(self, email: str, password: str) -> SessionUser:
        account = await self._account_for_email(email)
        if account is None or not verify_password(password, account["password_hash"]):
            raise ProviderError(ProviderErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
        if account["disabled"]:
            raise ProviderError(ProviderErrorCode.USER_DISABLED, USER_DISABLED_MESSAGE)
        return SessionUser(
            uid=account["uid"], email=account["email"], email_verified=account["email_verified"]
        )

    async def issue_session(self, uid: str) -> str:
        return create_session_token(uid)

    async def resolve_session(self, token: str) -> SessionUser | None:
        payload = decode_token(token)
        if payload is None or payload.get("type") != SESSION_TOKEN_TYPE:
            return None
        account = await self.store.get(ACCOUNTS, payload.get("sub", ""))
        if account is None or account["disabled"]:
            return None
        return SessionUser(
            uid=account["uid"], email=account["email"], email_verified=account["email_verified"]
        )

    async def _issue_action_code(
        self, mode: ActionMode, account: dict, continue_url: str | None = None
    ) -> SentAction:
        settings = get_settings()
        code = generate_action_code()
        expires_at = utc_now() + timedelta(hours=settings.action_code_expire_hours)
        await self.store.create(
            ACTION_CODES,
            hash_token(code),
            {
                "mode": mode.value,
                "uid": account["uid"],
                "email": account["email"],
                "expires_at": expires_at.isoformat(),
                "used": False,
            },
        )

        params = {"mode": mode.value, "oobCode": code}
        if continue_url:
            params["continueUrl"] = continue_url
        link = f"{settings.app_url}/auth/action?{urlencode(params)}"
        sent = SentAction(mode=mode, email=account["email"], code=code, link=link)
        self.outbox.append(sent)
        # No delivery; the link is only logged
        logger.info("Action link issued", mode=mode.value, uid=account["uid"], link=link)
        return sent

    async def send_email_verification(self, email: str, continue_url: str | None = None) -> None:
        account = await self._account_for_email(email)
        if account is None or account["email_verified"]:
            logger.debug("Verification email skipped", reason="unknown or verified account")
            return
        await self._issue_action_code(ActionMode.VERIFY_EMAIL, account, continue_url)

    async def send_password_reset(self, email: str) -> None:
        account = await self._account_for_email(email)
        if account is None:
            logger.debug("Password reset skipped", reason="unknown account")
            return
        await self._issue_action_code(ActionMode.RESET_PASSWORD, account)

    async def verify_email_code(self, code: str) -> str:
        code_id = hash_token(code)
        record = await self.store.get(ACTION_CODES, code_id)
        if record is None or record["used"] or record["mode"] != ActionMode.VERIFY_EMAIL.value:
            raise ActionCodeError(ActionCodeErrorKind.INVALID)
        if datetime.fromisoformat(record["expires_at"]) < utc_now():
            raise ActionCodeError(ActionCodeErrorKind.EXPIRED)

        account = await self.store.get(ACCOUNTS, record["uid"])
        if account is None:
            raise ActionCodeError(ActionCodeErrorKind.INVALID)
        if account["disabled"]:
            raise ActionCodeError(ActionCodeErrorKind.DISABLED)

        try:
            await self.store.update(ACTION_CODES, code_id, {"used": True}, expected={"used": False})
        except PreconditionFailedError as e:
            raise ActionCodeError(ActionCodeErrorKind.INVALID) from e
        except DocumentStoreError as e:
            raise ActionCodeError(ActionCodeErrorKind.UNKNOWN) from e

        await self.store.update(ACCOUNTS, account["uid"], {"email_verified": True})
        logger.info("Email verified", uid=account["uid"])
        return account["email"]

    async def disable_account(self, uid: str) -> None:
        await self.store.update(ACCOUNTS, uid, {"disabled": True})
        logger.info("Account disabled", uid=uid)
