"""Global enums — values are stable wire/storage strings and must match DB CHECK constraints."""

from enum import Enum


class OrderStatus(str, Enum):
    RECEIVED = "Recibido"
    DIAGNOSING = "En Diagnóstico"
    QUOTED = "Presupuestado"
    QUOTE_APPROVED = "Presupuesto Aprobado"
    AWAITING_PARTS = "En Espera de Repuestos"
    REPAIRING = "En Reparación"
    REPAIRED = "Reparado"
    QUALITY_CHECK = "En Control de Calidad"
    READY_FOR_PICKUP = "Listo para Entrega"
    DELIVERED = "Entregado"
    QUOTE_REJECTED = "Presupuesto Rechazado"
    NOT_REPAIRED = "Sin Reparación"


TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.QUOTE_REJECTED, OrderStatus.NOT_REPAIRED}
)


class ChecklistValue(str, Enum):
    YES = "si"
    NO = "no"
    UNCHECKED = "sc"


class ChecklistGroup(str, Enum):
    """PHYSICAL items are always assessable; FUNCTIONAL ones need device access."""
    PHYSICAL = "PHYSICAL"
    FUNCTIONAL = "FUNCTIONAL"


class ChecklistItem(str, Enum):
    # Physical condition
    CASING_MARKS = "golpe"
    SCREEN_GLASS = "cristal"
    FRAME = "marco"
    BENT_DEVICE = "equipo_doblado"
    BACK_COVER = "tapa"
    CAMERA_LENS = "lente_camara"
    CHARGING_PORT = "pin_carga"
    MOISTURE = "humedad"
    POWERS_ON = "enciende"
    # Functional
    TOUCH = "tactil"
    DISPLAY = "imagen"
    BUTTONS = "botones"
    REAR_CAMERA = "cam_trasera"
    FRONT_CAMERA = "cam_delantera"
    VIBRATOR = "vibrador"
    MICROPHONE = "microfono"
    EARPIECE = "auricular"
    SPEAKER = "parlante"
    FINGERPRINT = "sensor_huella"
    SIGNAL = "senal"
    WIFI_BLUETOOTH = "wifi_bluetooth"


class WarrantyType(str, Enum):
    DAYS_30 = "30d"
    DAYS_60 = "60d"
    DAYS_90 = "90d"
    CUSTOM = "custom"
    NONE = "none"


class AlertReason(str, Enum):
    AWAITING_PARTS = "AWAITING_PARTS"
    STALE_QUOTE = "STALE_QUOTE"
    STALE_PICKUP = "STALE_PICKUP"
    ABANDONMENT_RISK = "ABANDONMENT_RISK"
    ABANDONED = "ABANDONED"


class StatusContext(str, Enum):
    """Document context buckets; a status may belong to more than one."""
    INTAKE = "INTAKE"
    QUOTE = "QUOTE"
    REPAIR = "REPAIR"
    DELIVERY = "DELIVERY"


class DocumentVariant(str, Enum):
    SHOP_COPY = "shop-copy"
    CUSTOMER_VOUCHER = "customer-voucher"
    DUPLICATE_TALON = "duplicate-talon"


class OrderClassification(str, Enum):
    """Stock triage tag for devices left in the shop."""
    RED = "rojo"
    GREEN = "verde"
    OUT_OF_STOCK = "sin stock"
