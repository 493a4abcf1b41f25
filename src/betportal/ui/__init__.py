"""Mount-gated pages, their views and the submission state machine."""

from betportal.ui.mount import MountGuard
from betportal.ui.navigation import HistoryNavigator, Navigator
from betportal.ui.pages import AuthFormPage, DashboardPage, LoginPage, SignupPage
from betportal.ui.submission import SubmissionFlow, SubmissionPhase

__all__ = [
    "AuthFormPage",
    "DashboardPage",
    "HistoryNavigator",
    "LoginPage",
    "MountGuard",
    "Navigator",
    "SignupPage",
    "SubmissionFlow",
    "SubmissionPhase",
]
