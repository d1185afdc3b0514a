"""
Modèle TaxiOrder (table TAXI_ORDER): commande de taxi avec coordonnées, chauffeur et détail tarifaire.
Le statut suit la progression 0..5 (TaxiOrderStatus); aucune validation de transition n'est faite ici.
"""
from decimal import Decimal
from enum import IntEnum
from typing import Optional

from elderly_assistant.common.models import CamelModel


class TaxiOrderStatus(IntEnum):
    UNASSIGNED = 0
    DISPATCHED = 1
    ACCEPTED = 2
    PICKED_UP = 3
    COMPLETED = 4
    CANCELLED = 5

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    TaxiOrderStatus.UNASSIGNED: "待派单",
    TaxiOrderStatus.DISPATCHED: "已派单",
    TaxiOrderStatus.ACCEPTED: "司机已接单",
    TaxiOrderStatus.PICKED_UP: "已接驾",
    TaxiOrderStatus.COMPLETED: "已完成",
    TaxiOrderStatus.CANCELLED: "已取消",
}


class TaxiOrder(CamelModel):
    order_id: Optional[str] = None
    user_id: Optional[str] = None
    out_trade_no: Optional[str] = None
    start_address: Optional[str] = None
    start_longitude: Optional[Decimal] = None
    start_latitude: Optional[Decimal] = None
    end_address: Optional[str] = None
    end_longitude: Optional[Decimal] = None
    end_latitude: Optional[Decimal] = None
    start_time: Optional[str] = None
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    license_plate: Optional[str] = None
    driver_phone: Optional[str] = None
    status: Optional[TaxiOrderStatus] = None
    distance: Optional[Decimal] = None  # km
    duration: Optional[int] = None  # minutes
    base_fee: Optional[Decimal] = None
    distance_fee: Optional[Decimal] = None
    time_fee: Optional[Decimal] = None
    extra_fee: Optional[Decimal] = None
    discount_fee: Optional[Decimal] = None
    total_fee: Optional[Decimal] = None
    pay_status: Optional[str] = None
    create_time: Optional[int] = None
    dispatch_time: Optional[int] = None
    accept_time: Optional[int] = None
    pick_up_time: Optional[int] = None
    complete_time: Optional[int] = None
    cancel_time: Optional[int] = None
    cancelor: Optional[str] = None
    cancel_reason: Optional[str] = None
    remark: Optional[str] = None
