"""
Error handling for the dashboard pages.
Provides the error boundary decorator and the project-wide 404/500 views.
"""

import logging
from functools import wraps
from typing import Any, Callable

from asgiref.sync import iscoroutinefunction, sync_to_async
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import render

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = "invoices/error.html"


def _render_error(request: HttpRequest, view_func: Callable, exc: Exception) -> HttpResponse:
    logger.error(f"Unexpected error in {view_func.__name__}: {str(exc)}", exc_info=exc)
    return render(request, ERROR_TEMPLATE, {"retry_url": request.get_full_path()}, status=500)


def error_boundary(view_func: Callable) -> Callable:
    """
    Decorator that renders the error page for any unexpected failure.
    Http404 is never caught, so the not-found page always takes precedence.
    """
    if iscoroutinefunction(view_func):
        @wraps(view_func)
        async def async_wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
            try:
                return await view_func(request, *args, **kwargs)
            except Http404:
                raise
            except Exception as e:
                return await sync_to_async(_render_error)(request, view_func, e)

        return async_wrapper

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            return view_func(request, *args, **kwargs)
        except Http404:
            raise
        except Exception as e:
            return _render_error(request, view_func, e)

    return wrapper


def custom_404_view(request, exception=None):
    return render(request, "404.html", status=404)


def custom_500_view(request):
    return render(request, "500.html", status=500)
