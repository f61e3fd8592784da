"""Syntactic rules for the identity tag attached to every report."""

from __future__ import annotations

import re
from typing import Final, Literal

ANONYMOUS_ID: Final = "anonymous"
INTERNAL_TEST_ID: Final = "c0"

_CUSTOMER_RE: Final = re.compile(r"[cC]\d{1,30}")

IdentityKind = Literal["anonymous", "test", "customer"]


def is_anonymous(customer_id: str | None) -> bool:
    return bool(customer_id) and customer_id.lower() == ANONYMOUS_ID


def is_customer(customer_id: str | None) -> bool:
    return bool(customer_id) and _CUSTOMER_RE.fullmatch(customer_id) is not None


def is_internal_test(customer_id: str | None) -> bool:
    return bool(customer_id) and customer_id.lower() == INTERNAL_TEST_ID


def is_well_formed(customer_id: str | None) -> bool:
    return is_anonymous(customer_id) or is_customer(customer_id)


def identity_kind(customer_id: str) -> IdentityKind:
    if is_anonymous(customer_id):
        return "anonymous"
    if is_internal_test(customer_id):
        return "test"
    return "customer"


_ENDPOINT_PATHS: Final[dict[str, str]] = {
    "anonymous": "/anon",
    "test": "/test",
    "customer": "/submit",
}


def endpoint_path(customer_id: str) -> str:
    return _ENDPOINT_PATHS[identity_kind(customer_id)]
