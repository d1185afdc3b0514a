"""
Module 'payments' (feature-first): point d'entrée public.
Réunit modèles, repository BD (PAYMENT_CONFIG) et cas d'usage.
"""

from .models import PaymentItem, STATUS_PAID, STATUS_UNPAID, ITEM_ID_PREFIX
from .service import list_user_items, get_by_id, create, update, mark_paid, delete

__all__ = [
    # models
    "PaymentItem",
    "STATUS_PAID",
    "STATUS_UNPAID",
    "ITEM_ID_PREFIX",
    # services
    "list_user_items",
    "get_by_id",
    "create",
    "update",
    "mark_paid",
    "delete",
]
