"""Unit tests for the three printable document variants."""
from dataclasses import replace
from datetime import UTC, datetime

from src.rs_branch.domain.models import BranchSettings
from src.rs_common.enums import ChecklistItem, ChecklistValue, DocumentVariant, OrderStatus
from src.rs_order.domain import ledger
from src.rs_order.domain.checklist import normalize_checklist
from src.rs_order.domain.models import Order
from src.rs_order.domain.snapshot import take_snapshot
from src.rs_print.application.renderer import (
    build_customer_voucher,
    build_duplicate_talon,
    build_shop_copy,
    render_document,
)
from src.rs_print.domain.models import ClientInfo, PrintSource

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


def _source(live_settings: BranchSettings | None = None, **kwargs) -> PrintSource:
    legal = take_snapshot(
        "br-1",
        BranchSettings(
            company_name="Taller Centro",
            company_logo_url="https://cdn.example/logo-2025.png",
            warranty_conditions="Garantía firmada en 2025",
        ),
    )
    defaults = dict(
        id="ord_1", order_number="ORD007", branch_id="br-1", client_id="cli-1",
        device_brand="Samsung", device_model="A52", declared_fault="No carga",
        legal=legal, entry_date=NOW, created_by="u1",
        device_imei="356938035643809",
        unlock_pattern_provided=True, unlock_code="4321",
        checklist=normalize_checklist({ChecklistItem.TOUCH: ChecklistValue.YES}, True),
        customer_accepted=True, customer_signature_name="Juan Pérez",
    )
    defaults.update(kwargs)
    order = Order(**defaults)
    client = ClientInfo(id="cli-1", name="Juan", last_name="Pérez", dni="30111222", phone="555")
    return PrintSource(order=order, client=client, live_settings=live_settings)


class TestShopCopy:
    def test_internal_fields_present(self) -> None:
        view = build_shop_copy(_source())
        assert view["device"]["unlock_code"] == "4321"
        assert view["title"] == "Comprobante de Ingreso"
        assert view["checklist"] is not None

    def test_budget_hidden_without_amount(self) -> None:
        assert build_shop_copy(_source(status=OrderStatus.QUOTED))["budget"] is None

    def test_budget_lines(self) -> None:
        source = _source(status=OrderStatus.QUOTED)
        ledger.add_part(source.order, "p1", "Pin", 2, 500, 200)
        budget = build_shop_copy(source)["budget"]
        assert budget["lines"][0]["total"] == "$10.00"
        assert budget["total"] == "$10.00"

    def test_legal_text_from_snapshot_not_live_settings(self) -> None:
        live = BranchSettings(warranty_conditions="Texto editado hoy")
        view = build_shop_copy(_source(live_settings=live))
        texts = dict(view["legal"])
        assert texts["Garantía"] == "Garantía firmada en 2025"

    def test_logo_from_live_settings(self) -> None:
        live = BranchSettings(company_logo_url="https://cdn.example/logo-new.png")
        assert build_shop_copy(_source(live_settings=live))["header"]["logo_url"].endswith(
            "logo-new.png"
        )

    def test_logo_falls_back_to_snapshot(self) -> None:
        assert build_shop_copy(_source())["header"]["logo_url"].endswith("logo-2025.png")


class TestCustomerVoucher:
    def test_hides_unlock_code_and_costs(self) -> None:
        source = _source()
        ledger.add_part(source.order, "p1", "Pin", 1, 500, 200)
        view = build_customer_voucher(source)
        assert "unlock_code" not in view["device"]
        assert "budget" not in view
        html = render_document(DocumentVariant.CUSTOMER_VOUCHER, source)
        assert "4321" not in html
        assert "$5.00" not in html
        assert "Comprobante para el Cliente" in html

    def test_includes_all_checklist_rows(self) -> None:
        assert len(build_customer_voucher(_source())["checklist"]) == 21


class TestDuplicateTalon:
    def test_two_stubs(self) -> None:
        view = build_duplicate_talon(_source())
        assert [p["stub"] for p in view["pages"]] == [
            "Talón para el Taller",
            "Talón para el Cliente",
        ]
        html = render_document(DocumentVariant.DUPLICATE_TALON, _source())
        assert html.count("ORD007") >= 2
        assert "page-break" in html


class TestRenderDocument:
    def test_shop_copy_html(self) -> None:
        html = render_document(DocumentVariant.SHOP_COPY, _source())
        assert "<!DOCTYPE html>" in html
        assert "Taller Centro" in html
        assert "Garantía firmada en 2025" in html
        assert "Táctil" in html

    def test_escapes_user_text(self) -> None:
        source = _source()
        source = replace(source, order=replace(source.order, declared_fault="<script>x</script>"))
        html = render_document(DocumentVariant.SHOP_COPY, source)
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html
