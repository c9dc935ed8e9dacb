import asyncio

from asgiref.sync import sync_to_async
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from .. import actions
from ..cache import INVOICES_PATH
from ..data import store
from ..error_handlers import error_boundary
from ..results import Failed, NotFound, Redirect
from ..utils import generate_pagination


def _current_page(request) -> int:
    try:
        return max(int(request.GET.get("page", 1)), 1)
    except (TypeError, ValueError):
        return 1


def _form_values(form_data) -> dict:
    return {
        "customerId": form_data.get("customerId", ""),
        "amount": form_data.get("amount", ""),
        "status": form_data.get("status", ""),
    }


@login_required
def dashboard(request):
    context = {
        "card_data": store.fetch_card_data(),
        "latest_invoices": store.fetch_latest_invoices(),
        "page_title": "Dashboard",
    }
    return render(request, "pages/dashboard/overview.html", context)


@login_required
@error_boundary
def invoice_list(request):
    query = request.GET.get("query", "")
    current_page = _current_page(request)
    total_pages = store.fetch_invoices_pages(query)

    context = {
        "invoices": store.fetch_filtered_invoices(query, current_page),
        "query": query,
        "current_page": current_page,
        "total_pages": total_pages,
        "pages": generate_pagination(current_page, total_pages),
        "page_title": "Invoices",
    }
    return render(request, "pages/invoices/list.html", context)


@login_required
@error_boundary
@require_http_methods(["GET", "POST"])
def invoice_create(request):
    state = actions.ActionState()
    values = _form_values({})

    if request.method == "POST":
        result = actions.create_invoice(state, request.POST)
        if isinstance(result, Redirect):
            return redirect(result.path)
        state = result
        values = _form_values(request.POST)

    context = {
        "customers": store.fetch_customers(),
        "state": state,
        "values": values,
        "page_title": "Create Invoice",
    }
    return render(request, "pages/invoices/create.html", context)


@login_required
@error_boundary
@require_http_methods(["GET", "POST"])
async def invoice_edit(request, invoice_id):
    lookup, customers = await asyncio.gather(
        sync_to_async(store.fetch_invoice_by_id)(invoice_id),
        sync_to_async(store.fetch_customers)(),
    )

    if isinstance(lookup, NotFound):
        raise Http404(f"Invoice {invoice_id} not found")
    if isinstance(lookup, Failed):
        raise lookup.error

    invoice = lookup.value
    state = actions.ActionState()
    values = {
        "customerId": invoice.customer_id,
        "amount": str(invoice.amount),
        "status": invoice.status,
    }

    if request.method == "POST":
        result = await sync_to_async(actions.update_invoice)(invoice_id, state, request.POST)
        if isinstance(result, Redirect):
            return redirect(result.path)
        state = result
        values = _form_values(request.POST)

    context = {
        "invoice": invoice,
        "customers": customers,
        "state": state,
        "values": values,
        "page_title": "Edit Invoice",
    }
    return await sync_to_async(render)(request, "pages/invoices/edit.html", context)


@login_required
@error_boundary
@require_POST
def invoice_delete(request, invoice_id):
    state = actions.delete_invoice(invoice_id)
    if state.ok:
        messages.success(request, state.message)
    else:
        messages.error(request, state.message)
    return redirect(INVOICES_PATH)


@login_required
@error_boundary
def customer_list(request):
    query = request.GET.get("query", "")
    context = {
        "customers": store.fetch_filtered_customers(query),
        "query": query,
        "page_title": "Customers",
    }
    return render(request, "pages/customers/list.html", context)
