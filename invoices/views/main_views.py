"""
Authentication Views
Login and logout pages backed by the credentials sign-in handler.
"""
from django.conf import settings
from django.shortcuts import redirect, render
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_http_methods, require_POST
from django_ratelimit.decorators import ratelimit

from .. import actions
from ..auth import sign_out
from ..forms import LoginForm
from ..results import Redirect


@csrf_protect
@ratelimit(key='ip', rate=settings.LOGIN_RATE_LIMIT, method='POST', block=True)
@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.user.is_authenticated and request.method == 'GET':
        return redirect(settings.LOGIN_REDIRECT_URL)

    error_message = None
    if request.method == 'POST':
        result = actions.authenticate(request, None, request.POST)
        if isinstance(result, Redirect):
            return redirect(result.path)
        error_message = result
        form = LoginForm(request.POST)
        if not form.is_valid():
            form.add_error_class()
    else:
        form = LoginForm(initial={'redirectTo': request.GET.get('next', '')})

    return render(request, 'pages/auth/login.html', {'form': form, 'error_message': error_message})


@require_POST
def logout_view(request):
    return redirect(sign_out(request).path)
