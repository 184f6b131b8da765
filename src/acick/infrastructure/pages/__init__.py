"""AtCoder pages: one class per remote page, each with its acceptance rules."""

from .base import BASE_URL, ExtractCsrfToken, HasHeader, Page, RestrictedPage, build_url
from .login import LOGIN_URL, SETTINGS_URL, LoginPage, SettingsPage
from .submit import SubmitPage, submissions_me_url, submit_url
from .tasks import TasksPage, tasks_url
from .tasks_print import TasksPrintPage, extract_samples, tasks_print_url

__all__ = [
    "BASE_URL",
    "ExtractCsrfToken",
    "HasHeader",
    "LOGIN_URL",
    "LoginPage",
    "Page",
    "RestrictedPage",
    "SETTINGS_URL",
    "SettingsPage",
    "SubmitPage",
    "TasksPage",
    "TasksPrintPage",
    "build_url",
    "extract_samples",
    "submissions_me_url",
    "submit_url",
    "tasks_print_url",
    "tasks_url",
]
