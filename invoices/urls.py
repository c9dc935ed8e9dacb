from django.urls import path
from .views import main_views as views
from .views import dashboard_views

app_name = "invoices"

urlpatterns = [
    path('login', views.login_view, name='login'),
    path('logout', views.logout_view, name='logout'),
    path('dashboard', dashboard_views.dashboard, name='dashboard'),
    path('dashboard/invoices', dashboard_views.invoice_list, name='invoices_list'),
    path('dashboard/invoices/create', dashboard_views.invoice_create, name='invoice_create'),
    path('dashboard/invoices/<str:invoice_id>/edit', dashboard_views.invoice_edit, name='invoice_edit'),
    path('dashboard/invoices/<str:invoice_id>/delete', dashboard_views.invoice_delete, name='invoice_delete'),
    path('dashboard/customers', dashboard_views.customer_list, name='customers_list'),
]
