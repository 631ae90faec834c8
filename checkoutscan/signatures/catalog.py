"""Checkout / payment signature catalog.

Each entry is applied on its own to every script body; order only
matters for report ordering. All patterns are case-insensitive and use
ASCII word boundaries, so "écart" still counts as a "cart" word.
"""

import re
from typing import FrozenSet, Tuple

from checkoutscan.core.models import Signature


CATALOG_VERSION = "1"


def _sig(name: str, pattern: str) -> Signature:
    return Signature(name, re.compile(pattern, re.I | re.A))


SIGNATURES: Tuple[Signature, ...] = (
    # generic words
    _sig("word:checkout", r"checkout"),
    _sig("word:cart", r"\bcart\b"),
    # analytics events
    _sig("begin_checkout (gtag)",
         r"""gtag\s*\(\s*['"]event['"],\s*['"]begin_checkout['"]"""),
    _sig("InitiateCheckout (fbq)",
         r"""fbq\s*\(\s*['"]track['"],\s*['"]InitiateCheckout['"]"""),
    # platforms
    _sig("Stripe", r"stripe\."),
    _sig("Shopify", r"Shopify|ShopifyAnalytics|ShopifyDesignMode"),
    # variable / endpoint shapes
    _sig("checkoutUrl var", r"checkoutUrl\s*[:=]"),
    _sig("order api", r"\b(order|payment|transaction)[-_]?(api|url|endpoint)\b"),
    _sig("cart endpoints", r"/cart(\.js|/add|/update|/clear|/change)"),
    _sig("checkout endpoints", r"/checkout(\b|/|\?|#)"),
    # payment providers
    _sig("klarna", r"klarna"),
    _sig("adyen", r"adyen"),
    _sig("paypal", r"paypal"),
    _sig("apple pay", r"apple\s*pay"),
    _sig("google pay", r"google\s*pay"),
)

# High-confidence evidence of a checkout flow on their own.
STRONG_SIGNATURES: FrozenSet[str] = frozenset({
    "begin_checkout (gtag)",
    "InitiateCheckout (fbq)",
    "checkout endpoints",
    "Stripe",
    "Shopify",
})
