"""
Auth pages (login, signup) and the dashboard gate.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from betportal.auth.loader import ApiClientLoader
from betportal.auth.schemas import AuthResult, LoginCredentials, SignupDetails
from betportal.config import Settings, get_settings
from betportal.shared.exceptions import ValidationError
from betportal.shared.logging import get_logger
from betportal.ui.form import FieldSpec, FormState
from betportal.ui.mount import MountGuard
from betportal.ui.navigation import Navigator
from betportal.ui.submission import SubmissionFlow, SubmissionPhase
from betportal.ui.views import ContentView, FieldView, FormView, LinkView, PlaceholderView

if TYPE_CHECKING:
    from betportal.auth.client import ApiClient

logger = get_logger(__name__)


def _first_error_message(exc: PydanticValidationError) -> str:
    """Turn the first pydantic error into one line of user-facing text."""
    err = exc.errors()[0]
    msg = str(err.get("msg", "Invalid input"))
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {msg}" if loc else msg


class AuthFormPage(MountGuard):
    """A mount-gated page holding one auth form."""

    fields: tuple[FieldSpec, ...] = ()
    title: str = ""
    submit_label: str = "Submit"
    submitting_label: str = "Submitting..."
    failure_message: str = "Request failed. Please try again."
    request_model: type[BaseModel]

    def __init__(
        self,
        loader: ApiClientLoader,
        navigator: Navigator,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(loader)
        self._settings = settings or get_settings()
        self.form = FormState.for_fields(self.fields)
        self.flow = SubmissionFlow(
            navigator=navigator,
            success_route=self._settings.dashboard_route,
            failure_message=self.failure_message,
        )

    @property
    def phase(self) -> SubmissionPhase:
        return self.flow.phase

    @property
    def error(self) -> str | None:
        return self.flow.error

    def on_input(self, name: str, value: str) -> None:
        """Apply one input change; any visible error is cleared."""
        self.form.update(name, value)
        if self.flow.error:
            self.flow.clear_error()

    async def on_submit(self) -> SubmissionPhase:
        client = self._client
        return await self.flow.submit(
            ready=self.is_ready,
            call=lambda: self._send(client),
        )

    async def _send(self, client: ApiClient | None) -> AuthResult:
        assert client is not None
        try:
            request = self.request_model.model_validate(self.form.as_dict())
        except PydanticValidationError as e:
            raise ValidationError(_first_error_message(e)) from e
        return await self.perform(client, request)

    @abstractmethod
    async def perform(self, client: ApiClient, request: Any) -> AuthResult:
        ...

    @abstractmethod
    def links(self) -> tuple[LinkView, ...]:
        ...

    def render_placeholder(self) -> PlaceholderView:
        return PlaceholderView(field_count=len(self.fields))

    def render_interactive(self) -> FormView:
        submitting = self.flow.is_submitting
        return FormView(
            title=self.title,
            fields=tuple(
                FieldView(spec=spec, value=self.form.get(spec.name), disabled=submitting)
                for spec in self.fields
            ),
            submit_label=self.submitting_label if submitting else self.submit_label,
            submit_disabled=submitting or not self.is_ready,
            error=self.flow.error,
            links=self.links(),
        )


class LoginPage(AuthFormPage):
    fields = (
        FieldSpec(
            name="email",
            label="Email Address",
            input_type="email",
            placeholder="Enter your email",
            autocomplete="email",
        ),
        FieldSpec(
            name="password",
            label="Password",
            input_type="password",
            placeholder="Enter your password",
            autocomplete="current-password",
            min_length=8,
        ),
    )
    title = "Login to Your Account"
    submit_label = "Sign In"
    submitting_label = "Signing in..."
    failure_message = "Login failed. Please check your credentials."
    request_model = LoginCredentials

    async def perform(self, client: ApiClient, request: LoginCredentials) -> AuthResult:
        return await client.login(request)

    def links(self) -> tuple[LinkView, ...]:
        return (
            LinkView(self._settings.signup_route, "Create account", "Don't have an account?"),
            LinkView(self._settings.forgot_password_route, "Forgot your password?"),
        )


class SignupPage(AuthFormPage):
    fields = (
        FieldSpec(
            name="name",
            label="Full Name",
            placeholder="Enter your name",
            autocomplete="name",
        ),
        FieldSpec(
            name="email",
            label="Email Address",
            input_type="email",
            placeholder="Enter your email",
            autocomplete="email",
        ),
        FieldSpec(
            name="password",
            label="Password",
            input_type="password",
            placeholder="Create a password",
            autocomplete="new-password",
            min_length=8,
        ),
        FieldSpec(
            name="password_confirmation",
            label="Confirm Password",
            input_type="password",
            placeholder="Repeat your password",
            autocomplete="new-password",
            min_length=8,
        ),
    )
    title = "Create Your Account"
    submit_label = "Create Account"
    submitting_label = "Creating account..."
    failure_message = "Signup failed. Please try again."
    request_model = SignupDetails

    async def perform(self, client: ApiClient, request: SignupDetails) -> AuthResult:
        return await client.signup(request)

    def links(self) -> tuple[LinkView, ...]:
        return (LinkView(self._settings.login_route, "Sign in", "Already have an account?"),)


class DashboardPage(MountGuard):
    """Page reachable only with a stored token; otherwise sends the user to login."""

    def __init__(
        self,
        loader: ApiClientLoader,
        navigator: Navigator,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(loader)
        self._navigator = navigator
        self._settings = settings or get_settings()
        self.authenticated: bool | None = None

    async def check_auth(self) -> bool:
        """Wait for attach to finish, then redirect to login when no token is stored."""
        await self.ready.wait()
        client = self._client
        self.authenticated = client is not None and client.is_authenticated
        if not self.authenticated:
            logger.info("No auth token; redirecting to login")
            self._navigator.replace(self._settings.login_route)
        return self.authenticated

    def render_placeholder(self) -> PlaceholderView:
        return PlaceholderView(field_count=0)

    def render_interactive(self) -> PlaceholderView | ContentView:
        if not self.authenticated:
            return self.render_placeholder()
        return ContentView(title="Dashboard", body="You are signed in.")
