"""
Server pass of the auth pages.

Each request renders a fresh, never-attached page instance, so the response
is always the placeholder the client will hydrate.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from betportal.auth.loader import ApiClientLoader
from betportal.config import Settings, get_settings
from betportal.ui.mount import MountGuard
from betportal.ui.navigation import HistoryNavigator
from betportal.ui.pages import DashboardPage, LoginPage, SignupPage
from betportal.ui.views import render_document

router = APIRouter(tags=["pages"])


def get_client_loader(request: Request) -> ApiClientLoader:
    """The loader owned by this application instance."""
    return request.app.state.client_loader


def _server_pass(page: MountGuard, title: str) -> HTMLResponse:
    return HTMLResponse(render_document(title, page.render()))


@router.get("/auth/login", response_class=HTMLResponse)
async def login_page(
    loader: Annotated[ApiClientLoader, Depends(get_client_loader)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    page = LoginPage(loader, HistoryNavigator(settings.login_route), settings)
    return _server_pass(page, "Login")


@router.get("/auth/signup", response_class=HTMLResponse)
async def signup_page(
    loader: Annotated[ApiClientLoader, Depends(get_client_loader)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    page = SignupPage(loader, HistoryNavigator(settings.signup_route), settings)
    return _server_pass(page, "Sign up")


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    loader: Annotated[ApiClientLoader, Depends(get_client_loader)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    page = DashboardPage(loader, HistoryNavigator(settings.dashboard_route), settings)
    return _server_pass(page, "Dashboard")
