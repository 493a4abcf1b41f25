"""
HTTP client for the remote auth API.

Every failure below the application level (connection refused, timeout,
non-JSON error page) is converted to ``RemoteCallError`` so the pages only
ever deal with one exception type.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from betportal.auth.schemas import AuthResult, LoginCredentials, SignupDetails
from betportal.auth.token import PersistedToken
from betportal.config import Settings, get_settings
from betportal.shared.exceptions import NETWORK_ERROR_MESSAGE, RemoteCallError
from betportal.shared.logging import get_logger
from betportal.storage.interface import ClientStorage

logger = get_logger(__name__)


class ApiClient:
    """Auth API client.

    Owns the persisted token of the current client: it is read lazily on the
    first request that needs it and saved after a successful login or signup.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        storage: ClientStorage | None = None,
        http_client: httpx.AsyncClient | None = None,
        token: PersistedToken | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings.
            storage: Client storage; None when the environment has none.
            http_client: Optional preconfigured httpx client (tests inject a MockTransport).
            token: Optional token accessor; built from ``storage`` when omitted.
        """
        self._settings = settings or get_settings()
        self._http_client = http_client
        self._owns_client = http_client is None
        self._token = token or PersistedToken(storage, self._settings.token_storage_key)

    @property
    def token(self) -> PersistedToken:
        return self._token

    def get_token(self) -> str | None:
        return self._token.get_token()

    @property
    def is_authenticated(self) -> bool:
        return self._token.get_token() is not None

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.api_timeout_seconds),
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _get_api_url(self, endpoint: str) -> str:
        return f"{self._settings.api_base_url}{endpoint}"

    def _headers(self, authenticated: bool = False) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated:
            token = self._token.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def login(self, credentials: LoginCredentials | dict[str, Any]) -> AuthResult:
        """Authenticate with email and password.

        Raises:
            RemoteCallError: On network failure or an unreadable response.
        """
        if not isinstance(credentials, LoginCredentials):
            credentials = LoginCredentials.model_validate(credentials)

        result = await self._post_auth(
            "/auth/login",
            credentials.model_dump(mode="json"),
            context={"email": credentials.email},
        )
        self._remember(result)
        return result

    async def signup(self, details: SignupDetails | dict[str, Any]) -> AuthResult:
        """Register a new account.

        Raises:
            RemoteCallError: On network failure or an unreadable response.
        """
        if not isinstance(details, SignupDetails):
            details = SignupDetails.model_validate(details)

        result = await self._post_auth(
            "/auth/register",
            details.model_dump(mode="json"),
            context={"email": details.email},
        )
        self._remember(result)
        return result

    async def logout(self) -> None:
        """Forget the local token; tell the backend when a token was held.

        Remote failures are logged, the local token is cleared regardless.
        """
        had_token = self._token.get_token() is not None
        headers = self._headers(authenticated=True)
        self._token.clear()

        if not had_token:
            return

        try:
            await self._get_client().post(self._get_api_url("/auth/logout"), headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Remote logout failed", extra={"error": str(e)})

    def _remember(self, result: AuthResult) -> None:
        if result.success and result.token:
            self._token.save(result.token)

    async def _post_auth(
        self,
        endpoint: str,
        payload: dict[str, Any],
        context: dict[str, Any],
    ) -> AuthResult:
        url = self._get_api_url(endpoint)
        logger.info("Auth request", extra={"endpoint": endpoint, **context})

        try:
            response = await self._get_client().post(
                url,
                json=payload,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.warning(
                "HTTP error during auth request",
                extra={"endpoint": endpoint, "error": str(e), "error_type": type(e).__name__},
            )
            raise RemoteCallError(NETWORK_ERROR_MESSAGE) from e

        return self._parse_auth_response(endpoint, response)

    def _parse_auth_response(self, endpoint: str, response: httpx.Response) -> AuthResult:
        try:
            data = response.json() if response.content else None
        except ValueError:
            data = None

        if not isinstance(data, dict):
            logger.error(
                "Auth response is not a JSON object",
                extra={"endpoint": endpoint, "status_code": response.status_code},
            )
            raise RemoteCallError(
                "" if response.status_code >= 400 else "Unexpected response from server.",
                status_code=response.status_code,
            )

        if "success" not in data:
            # Framework-generated bodies, e.g. {"message": ..., "errors": {...}}
            data = {**data, "success": response.status_code < 400}

        try:
            result = AuthResult.model_validate(data)
        except PydanticValidationError as e:
            logger.error(
                "Auth response failed validation",
                extra={"endpoint": endpoint, "status_code": response.status_code},
            )
            raise RemoteCallError(
                "Unexpected response from server.",
                status_code=response.status_code,
                details={"errors": e.errors(include_url=False)},
            ) from e

        logger.info(
            "Auth response",
            extra={
                "endpoint": endpoint,
                "status_code": response.status_code,
                "success": result.success,
            },
        )
        return result
