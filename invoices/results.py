"""
Tagged outcomes returned by lookups and handlers.

Callers branch on the variant instead of catching exceptions:

    lookup = store.fetch_invoice_by_id(invoice_id)
    if isinstance(lookup, NotFound):
        raise Http404(...)
    if isinstance(lookup, Failed):
        raise lookup.error
    invoice = lookup.value
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    resource: str = "resource"
    resource_id: Optional[str] = None


@dataclass(frozen=True)
class Failed:
    kind: str
    error: Exception


Lookup = Union[Found[T], NotFound, Failed]


@dataclass(frozen=True)
class Redirect:
    """Navigation outcome of a completed mutation; views turn it into a 302."""
    path: str
