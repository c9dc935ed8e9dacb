from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

from invoices import health

handler404 = "invoices.error_handlers.custom_404_view"
handler500 = "invoices.error_handlers.custom_500_view"

urlpatterns = [
    path("", RedirectView.as_view(url="/dashboard", permanent=False), name="root"),
    path("admin/", admin.site.urls),
    path("health/", health.health_check, name="health_check"),
    path("health/ready/", health.readiness_check, name="readiness_check"),
    path("health/live/", health.liveness_check, name="liveness_check"),
    path("", include("invoices.urls", namespace="invoices")),
]
