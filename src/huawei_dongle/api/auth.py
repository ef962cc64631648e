"""
Huawei Dongle Client - Authentication Endpoints

Login state, login and logout against the device web UI. Login reads the
unauthenticated login state first to learn whether the account is already
logged in or locked, and which password encoding the firmware expects.
"""

import logging

from ..core.auth import encode_password
from ..core.exceptions import AccountLockedError, LoginRequiredError, ResponseParseError
from ..core.payload import build_request, is_ok_response
from ..core.pipeline import RequestPipeline
from ..shared.constants import API_USER_LOGIN, API_USER_LOGOUT, API_USER_STATE_LOGIN
from .models import LoginState

logger = logging.getLogger("huawei-dongle")


class AuthApi:
    """Authentication endpoints."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def state_login(self) -> LoginState:
        """Fetch the login state. Does not require authentication."""
        logger.debug("Fetching login state")
        text = await self.pipeline.call(
            API_USER_STATE_LOGIN, authenticated=False, operation="state_login"
        )
        state = LoginState.from_xml(text)
        logger.debug(
            f"Login state: {'logged in' if state.is_logged_in else 'not logged in'} "
            f"(password_type: {state.password_type})"
        )
        return state

    async def login(self, username: str, password: str) -> None:
        """Log in to the device.

        A no-op when the device reports the account as already logged in.

        Args:
            username: Web UI username
            password: Plain text password, encoded as the device requires

        Raises:
            AccountLockedError: The account is locked; carries the remaining wait time
            InvalidUsernameError: Unknown username
            InvalidPasswordError: Wrong password
            InvalidCredentialsError: Username or password wrong
            TooManyLoginAttemptsError: The device refuses further attempts for now
        """
        logger.debug(f"Attempting login for user: {username}")

        login_state = await self.state_login()

        if login_state.is_logged_in:
            logger.debug("User is already logged in")
            await self.pipeline.session.mark_authenticated(login_state.username or username)
            return

        if login_state.is_locked:
            raise AccountLockedError(
                f"Account is locked. Wait time: {login_state.remain_wait_time} seconds",
                remaining_wait_time=login_state.remain_wait_time,
            )

        body = build_request({
            "Username": username,
            "Password": encode_password(password, login_state.password_type),
            "password_type": login_state.password_type,
        })

        # Unauthenticated, but the POST still carries the session token.
        text = await self.pipeline.call(
            API_USER_LOGIN, body, authenticated=False, operation="login"
        )
        if not is_ok_response(text):
            raise ResponseParseError("Unexpected login response", response_text=text)

        await self.pipeline.session.mark_authenticated(username)
        logger.info(f"Login successful for user: {username}")

    async def logout(self) -> None:
        """Log out and drop the local session.

        Logging out of a session the device already considers logged out succeeds.
        """
        logger.debug("Attempting logout")

        body = build_request({"Logout": "1"})
        try:
            text = await self.pipeline.call(API_USER_LOGOUT, body, operation="logout")
        except LoginRequiredError:
            logger.debug("Device reports no active login, treating as logged out")
        else:
            if not is_ok_response(text):
                raise ResponseParseError("Unexpected logout response", response_text=text)

        await self.pipeline.session.invalidate()
        logger.info("Logout successful")
