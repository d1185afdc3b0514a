"""
Modèles du domaine 'payments' (table PAYMENT_CONFIG).
- PaymentItem: poste de facturation (eau, électricité, internet, téléphone) d'un utilisateur.
- Sérialisation API en camelCase (itemId, userId...), colonnes BD en snake_case via le repository.
- VoicePayRequest / VoicePayResponse: contrat de l'endpoint de paiement vocal (réponse simulée).
"""
from decimal import Decimal
from typing import Optional

from pydantic import field_serializer

from elderly_assistant.common.models import CamelModel

STATUS_UNPAID = "欠费"
STATUS_PAID = "已缴清"
ITEM_ID_PREFIX = "PAY_ITEM_"


class PaymentItem(CamelModel):
    item_id: Optional[str] = None
    user_id: Optional[str] = None
    item_type: Optional[str] = None
    account: Optional[str] = None
    amount: Optional[Decimal] = None
    status: Optional[str] = None
    due_date: Optional[str] = None
    bill_month: Optional[str] = None
    remark: Optional[str] = None
    create_time: Optional[int] = None
    update_time: Optional[int] = None
    last_pay_time: Optional[int] = None

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, v: Optional[Decimal]):
        # Le front attend un nombre JSON (pas la chaîne produite par défaut pour Decimal)
        return float(v) if v is not None else None


class PaymentOrder(CamelModel):
    """Paramètres de paiement (non alimentés: aucune passerelle n'est branchée)."""
    time_stamp: Optional[str] = None
    nonce_str: Optional[str] = None
    package_str: Optional[str] = None
    pay_sign: Optional[str] = None


class VoicePayRequest(CamelModel):
    user_id: Optional[str] = None
    audio_data: Optional[str] = None
    session_id: Optional[str] = None


class VoicePayResponse(CamelModel):
    session_id: str
    reply_text: str
    need_tts: bool = True
    payment_order: Optional[PaymentOrder] = None
