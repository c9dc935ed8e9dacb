"""
Credentials sign-in on top of django.contrib.auth.

sign_in() raises AuthError with a short type code when a login attempt is
rejected, so callers can map known rejections to a message and let anything
else propagate.
"""
import logging

from django.conf import settings
from django.contrib import auth as django_auth
from django.utils.http import url_has_allowed_host_and_scheme

from .forms import LoginForm
from .results import Redirect

logger = logging.getLogger(__name__)

PROVIDERS = ("credentials",)


class AuthError(Exception):
    """A rejected sign-in attempt; `type` names the reason."""

    def __init__(self, type: str):
        super().__init__(type)
        self.type = type


def _safe_redirect(request, target: str) -> str:
    if target and url_has_allowed_host_and_scheme(
        target,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ) and target.startswith("/") and not target.startswith("//"):
        return target
    return settings.LOGIN_REDIRECT_URL


def sign_in(request, provider: str, form_data) -> Redirect:
    if provider not in PROVIDERS:
        raise AuthError("Configuration")

    form = LoginForm(form_data)
    if not form.is_valid():
        raise AuthError("CredentialsSignin")

    email = form.cleaned_data["email"]
    user = django_auth.authenticate(
        request,
        username=email,
        password=form.cleaned_data["password"],
    )
    if user is None:
        logger.info(f"Rejected sign-in for {email}")
        raise AuthError("CredentialsSignin")

    django_auth.login(request, user)
    logger.info(f"User {user.pk} signed in")
    return Redirect(_safe_redirect(request, form.cleaned_data.get("redirectTo", "")))


def sign_out(request) -> Redirect:
    django_auth.logout(request)
    return Redirect(settings.LOGOUT_REDIRECT_URL)
