from django import template

from ..utils import format_currency, format_date_to_local

register = template.Library()


@register.filter
def currency(cents):
    return format_currency(cents)


@register.filter
def local_date(value):
    if not value:
        return ""
    return format_date_to_local(value)
