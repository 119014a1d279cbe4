"""
Sign-in / sign-up form flow.

Holds the state the auth modal works with (active tab, field values, loading
flag, messages) and runs submissions against AuthService.
"""
from typing import Optional

from models.user import AuthResult, AuthTab
from services.auth_service import AuthService, is_user_exists_error

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"
USER_EXISTS_MESSAGE = "Account already exists! Please sign in instead."
CONFIRMATION_SENT_MESSAGE = "Check your email for the confirmation link!"


class AuthForm:
    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service
        self.active_tab = AuthTab.SIGN_IN
        self.email = ""
        self.password = ""
        self.confirm_password = ""
        self.loading = False
        self.user_exists_message = ""
        self.alert: Optional[str] = None
        self.closed = False
        self.result: Optional[AuthResult] = None

    def open(self) -> None:
        """Reset to the sign-in tab whenever the form is shown"""
        self.user_exists_message = ""
        self.active_tab = AuthTab.SIGN_IN
        self.alert = None
        self.closed = False

    def change_tab(self, tab: AuthTab) -> None:
        self.active_tab = AuthTab(tab)
        self.user_exists_message = ""

    async def submit_sign_in(self) -> AuthResult:
        self.loading = True
        self.user_exists_message = ""
        self.alert = None

        try:
            self.result = await self.auth_service.sign_in(self.email, self.password)
            if self.result.error:
                self.alert = self.result.error.message
            else:
                self.closed = True
            return self.result
        finally:
            self.loading = False

    async def submit_sign_up(self) -> Optional[AuthResult]:
        """
        Submit the sign-up tab.

        Returns None without contacting the provider when the two password
        fields differ.
        """
        self.alert = None
        if self.password != self.confirm_password:
            self.alert = PASSWORD_MISMATCH_MESSAGE
            return None

        self.loading = True
        self.user_exists_message = ""

        try:
            self.result = await self.auth_service.sign_up(self.email, self.password)
            error = self.result.error

            if is_user_exists_error(error):
                self.active_tab = AuthTab.SIGN_IN
                self.user_exists_message = USER_EXISTS_MESSAGE
                self.password = ""
                self.confirm_password = ""
            elif error:
                self.alert = error.message
            else:
                self.alert = CONFIRMATION_SENT_MESSAGE
                self.closed = True
            return self.result
        finally:
            self.loading = False
