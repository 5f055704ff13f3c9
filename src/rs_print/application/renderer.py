"""DocumentRenderer — three audience-specific documents from one PrintSource.

Each variant is built in two steps: a pure view-model builder that decides
what the audience may see, then a Jinja2 template that only lays it out.
Legal text always comes from the order's snapshot; live branch settings only
contribute the current logo.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from src.rs_common.cents import cents_to_display
from src.rs_common.enums import ChecklistGroup, ChecklistValue, DocumentVariant
from src.rs_order.domain import ledger
from src.rs_order.domain.checklist import CHECKLIST_LABELS, group_of
from src.rs_order.domain.models import Order
from src.rs_print.domain.contexts import Section, document_title, visible_sections
from src.rs_print.domain.models import ClientInfo, PrintSource

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)

_CHECKLIST_DISPLAY = {
    ChecklistValue.YES: "Sí",
    ChecklistValue.NO: "No",
    ChecklistValue.UNCHECKED: "No comprobado",
}

_SIGNATURE_LABELS: tuple[tuple[Section, str], ...] = (
    (Section.CLIENT_RECEPTION_SIGNATURE, "Firma del Cliente (recepción)"),
    (Section.TECHNICIAN_RECEPTION_SIGNATURE, "Firma del Técnico Responsable"),
    (Section.CLIENT_QUOTE_SIGNATURE, "Firma del Cliente (aprobación de presupuesto)"),
    (Section.CLIENT_DELIVERY_SIGNATURE, "Firma del Cliente (retiro del equipo)"),
)

_TEMPLATES = {
    DocumentVariant.SHOP_COPY: "shop_copy.html.j2",
    DocumentVariant.CUSTOMER_VOUCHER: "customer_voucher.html.j2",
    DocumentVariant.DUPLICATE_TALON: "duplicate_talon.html.j2",
}


def _fmt_datetime(value: datetime | None) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else ""


def _fmt_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


# ---------------------------------------------------------------------------
# Shared blocks
# ---------------------------------------------------------------------------


def _header(source: PrintSource) -> dict[str, str]:
    legal = source.order.legal
    live_logo = source.live_settings.company_logo_url if source.live_settings else None
    return {
        "company_name": legal.company_name,
        "company_address": legal.company_address,
        "company_contact_details": legal.company_contact_details,
        "company_cuit": legal.company_cuit,
        "logo_url": live_logo or legal.company_logo_url,
    }


def _order_block(order: Order) -> dict[str, str]:
    return {
        "number": order.order_number,
        "status": order.status.value,
        "entry_date": _fmt_datetime(order.entry_date),
        "promised_delivery_date": _fmt_date(order.promised_delivery_date),
    }


def _client_block(client: ClientInfo) -> dict[str, str]:
    return {
        "full_name": client.full_name,
        "dni": client.dni or "",
        "phone": client.phone or "",
        "email": client.email or "",
        "address": client.address or "",
    }


def _device_block(order: Order) -> dict[str, str]:
    return {
        "brand": order.device_brand,
        "model": order.device_model,
        "imei": "No visible" if order.imei_not_visible else (order.device_imei or ""),
    }


def _checklist_rows(order: Order, group: ChecklistGroup) -> list[dict[str, str]]:
    return [
        {
            "label": label,
            "value": _CHECKLIST_DISPLAY[order.checklist.get(item, ChecklistValue.UNCHECKED)],
        }
        for item, label in CHECKLIST_LABELS.items()
        if group_of(item) is group
    ]


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------


def build_shop_copy(source: PrintSource) -> dict[str, Any]:
    order = source.order
    legal = order.legal
    sections = visible_sections(order)

    device = _device_block(order)
    device["unlock_provided"] = "Sí" if order.unlock_pattern_provided else "No"
    device["unlock_code"] = order.unlock_code or ""

    checklist = None
    if Section.CHECKLIST in sections:
        checklist = {
            "physical": _checklist_rows(order, ChecklistGroup.PHYSICAL),
            "functional": _checklist_rows(order, ChecklistGroup.FUNCTIONAL),
        }

    comments = None
    if Section.COMMENTS in sections:
        comments = [
            {
                "timestamp": _fmt_datetime(c.timestamp),
                "user_name": c.user_name,
                "description": c.description,
            }
            for c in order.comments_history
        ]

    budget = None
    if Section.BUDGET in sections:
        budget = {
            "lines": [
                {
                    "part_name": line.part_name,
                    "quantity": line.quantity,
                    "unit_price": cents_to_display(line.unit_sale_price),
                    "total": cents_to_display(line.line_total),
                }
                for line in order.parts_used
            ],
            "spare_parts": cents_to_display(order.cost_spare_part),
            "labor": cents_to_display(order.cost_labor),
            "total": cents_to_display(ledger.total_estimate(order)),
            "pending": cents_to_display(order.cost_pending) if order.cost_pending else "",
            "variation_notice": legal.budget_variation_text,
        }

    warranty = None
    if Section.WARRANTY in sections:
        warranty = {
            "type": order.warranty_type.value,
            "start": _fmt_date(order.warranty_start_date),
            "end": _fmt_date(order.warranty_end_date),
            "covered_item": order.warranty_covered_item or "",
            "notes": order.warranty_notes or "",
        }

    return {
        "title": document_title(order.status),
        "header": _header(source),
        "order": _order_block(order),
        "client": _client_block(source.client),
        "device": device,
        "declared_fault": order.declared_fault,
        "intake": {
            "damage_risk": order.damage_risk or "",
            "observations": order.observations or "",
            "battery_consumption": order.battery_consumption or "",
            "battery_capacity_mah": order.battery_capacity_mah or "",
        },
        "checklist": checklist,
        "comments": comments,
        "budget": budget,
        "warranty": warranty,
        "legal": [
            ("Diagnóstico y Presupuesto", legal.budget_variation_text),
            ("Responsabilidad sobre Datos", legal.data_loss_policy_text),
            ("Privacidad", legal.privacy_policy_text),
            ("Desbloqueo", legal.unlock_disclaimer_text),
            ("Equipos sin Encender/Clave", legal.untested_device_policy_text),
            ("Riesgos Especiales", legal.high_risk_device_text),
            ("Pantallas con Daño Parcial", legal.partial_damage_display_text),
            ("Garantía", legal.warranty_conditions),
            ("Anulación de Garantía", legal.warranty_void_conditions_text),
            ("Retiro", legal.pickup_conditions),
            ("Política de Abandono", legal.abandonment_policy_text),
        ],
        "customer_signature_name": order.customer_signature_name or "",
        "signatures": [label for section, label in _SIGNATURE_LABELS if section in sections],
    }


def build_customer_voucher(source: PrintSource) -> dict[str, Any]:
    """Customer-facing: no unlock code, no cost lines, no margin."""
    order = source.order
    legal = order.legal
    client = source.client
    return {
        "title": "Comprobante para el Cliente",
        "header": _header(source),
        "order": _order_block(order),
        "client": {"full_name": client.full_name, "dni": client.dni or ""},
        "device": _device_block(order),
        "declared_fault": order.declared_fault,
        "checklist": _checklist_rows(order, ChecklistGroup.PHYSICAL)
        + _checklist_rows(order, ChecklistGroup.FUNCTIONAL),
        "legal": [
            ("Garantía", legal.warranty_conditions),
            ("Retiro", legal.pickup_conditions),
            ("Anulación de Garantía", legal.warranty_void_conditions_text),
        ],
        "acknowledgement": (
            "Declaro haber recibido el equipo detallado en las condiciones mencionadas."
        ),
        "signatures": ["Firma del Cliente", "Aclaración", "DNI"],
    }


def build_duplicate_talon(source: PrintSource) -> dict[str, Any]:
    """Two tear-off stubs sharing header and order number."""
    order = source.order
    client = source.client
    common = {
        "client_name": client.full_name,
        "client_phone": client.phone or "",
        "device": f"{order.device_brand} {order.device_model}",
        "declared_fault": order.declared_fault,
    }
    return {
        "title": "Talón",
        "header": _header(source),
        "order": _order_block(order),
        "pages": [
            {
                "stub": "Talón para el Taller",
                **common,
                "notice": "",
                "signature": "Firma del Cliente",
            },
            {
                "stub": "Talón para el Cliente",
                **common,
                "notice": order.legal.pickup_conditions,
                "signature": "Firma y Sello del Taller",
            },
        ],
    }


_BUILDERS = {
    DocumentVariant.SHOP_COPY: build_shop_copy,
    DocumentVariant.CUSTOMER_VOUCHER: build_customer_voucher,
    DocumentVariant.DUPLICATE_TALON: build_duplicate_talon,
}


def build_view(variant: DocumentVariant, source: PrintSource) -> dict[str, Any]:
    return _BUILDERS[variant](source)


def render_document(variant: DocumentVariant, source: PrintSource) -> str:
    """Render one document variant as a standalone HTML page."""
    template = _env.get_template(_TEMPLATES[variant])
    return template.render(**build_view(variant, source))
