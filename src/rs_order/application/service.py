"""OrderApplicationService — composition layer for the order lifecycle.

Each public method is one transaction: load the order, run the domain
component that owns the mutation, write, commit. Any error rolls the whole
thing back, including part-stock adjustments made along the way.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.rs_branch.domain.repository import BranchRepositoryProtocol
from src.rs_branch.infrastructure.persistence import BranchRepository
from src.rs_common.actor import Actor
from src.rs_common.datetime_utils import utc_now
from src.rs_common.enums import OrderStatus
from src.rs_common.errors import (
    BranchNotFoundError,
    OrderNotFoundError,
    PartNotFoundError,
    ValidationError,
)
from src.rs_common.id_generator import generate_comment_id, generate_order_id
from src.rs_inventory.domain.repository import PartRepositoryProtocol
from src.rs_inventory.infrastructure.persistence import PartRepository
from src.rs_order.application.schemas import (
    AddCommentRequest,
    AddPartRequest,
    AlertListResponse,
    AlertResponse,
    CommentResponse,
    CreateOrderRequest,
    OrderListResponse,
    OrderResponse,
    OrderSummary,
    SetCostsRequest,
    SetWarrantyRequest,
    StatusChangeRequest,
    UpdateOrderRequest,
    UpdatePartLineRequest,
    cursor_decode,
    cursor_encode,
)
from src.rs_order.domain import ledger
from src.rs_order.domain.alerts import AlertThresholds, evaluate_alerts
from src.rs_order.domain.checklist import normalize_checklist
from src.rs_order.domain.models import Order, OrderComment
from src.rs_order.domain.repository import OrderRepositoryProtocol
from src.rs_order.domain.snapshot import check_acceptance, take_snapshot
from src.rs_order.domain.state_machine import INITIAL_STATUS, apply_transition
from src.rs_order.domain.warranty import (
    apply_terms,
    calculate_warranty,
    reanchor_warranty,
    warranty_anchor,
)
from src.rs_order.infrastructure.persistence import OrderRepository

logger = logging.getLogger(__name__)


def format_order_number(number: int) -> str:
    return f"{settings.ORDER_NUMBER_PREFIX}{number:0{settings.ORDER_NUMBER_WIDTH}d}"


class OrderApplicationService:
    def __init__(
        self,
        repo: OrderRepositoryProtocol | None = None,
        part_repo: PartRepositoryProtocol | None = None,
        branch_repo: BranchRepositoryProtocol | None = None,
    ) -> None:
        self._repo: OrderRepositoryProtocol = repo or OrderRepository()
        self._part_repo: PartRepositoryProtocol = part_repo or PartRepository()
        self._branch_repo: BranchRepositoryProtocol = branch_repo or BranchRepository()

    async def _get_order(self, db: AsyncSession, order_id: str) -> Order:
        order = await self._repo.get_by_id(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def _lock_order(self, db: AsyncSession, order_id: str) -> Order:
        order = await self._repo.get_for_update(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def _consume_part(self, db: AsyncSession, order: Order, body: AddPartRequest) -> None:
        """Add a cost line and take its units out of stock."""
        part = await self._part_repo.get_by_id(db, body.part_id)
        if part is None:
            raise PartNotFoundError(body.part_id)
        ledger.add_part(
            order,
            part_id=part.id,
            part_name=part.name,
            quantity=body.quantity,
            unit_sale_price=(
                body.unit_sale_price if body.unit_sale_price is not None else part.sale_price
            ),
            unit_cost_price=(
                body.unit_cost_price if body.unit_cost_price is not None else part.cost_price
            ),
        )
        await self._part_repo.adjust_stock(db, part.id, -body.quantity)

    async def _return_stock(self, db: AsyncSession, part_id: str, quantity: int) -> None:
        try:
            await self._part_repo.adjust_stock(db, part_id, quantity)
        except PartNotFoundError:
            # Part was deleted from inventory; the order edit still goes through.
            logger.warning(
                "Part %s no longer exists, %d units not returned to stock",
                part_id,
                quantity,
            )

    # ------------------------------------------------------------------
    # Intake
    # ------------------------------------------------------------------

    async def create_order(
        self, db: AsyncSession, body: CreateOrderRequest, actor: Actor
    ) -> OrderResponse:
        now = utc_now()
        try:
            branch = await self._branch_repo.get_by_id(db, body.branch_id)
            if branch is None:
                raise BranchNotFoundError(body.branch_id)
            legal = take_snapshot(branch.id, branch.settings)
            check_acceptance(
                legal,
                customer_accepted=body.customer_accepted,
                customer_signature_name=body.customer_signature_name,
                data_loss_disclaimer_accepted=body.data_loss_disclaimer_accepted,
                privacy_policy_accepted=body.privacy_policy_accepted,
            )

            order = Order(
                id=generate_order_id(),
                order_number="",
                branch_id=body.branch_id,
                client_id=body.client_id,
                assigned_technician_id=body.assigned_technician_id,
                previous_order_id=body.previous_order_id,
                device_brand=body.device_brand,
                device_model=body.device_model,
                device_imei=None if body.imei_not_visible else body.device_imei,
                imei_not_visible=body.imei_not_visible,
                declared_fault=body.declared_fault,
                unlock_pattern_provided=body.unlock_pattern_provided,
                unlock_code=body.unlock_code,
                checklist=normalize_checklist(body.checklist, body.unlock_pattern_provided),
                battery_consumption=body.battery_consumption,
                battery_capacity_mah=body.battery_capacity_mah,
                damage_risk=body.damage_risk,
                observations=body.observations,
                classification=body.classification,
                customer_accepted=body.customer_accepted,
                customer_signature_name=body.customer_signature_name,
                data_loss_disclaimer_accepted=body.data_loss_disclaimer_accepted,
                privacy_policy_accepted=body.privacy_policy_accepted,
                warranty_covered_item=body.warranty_covered_item,
                warranty_notes=body.warranty_notes,
                legal=legal,
                entry_date=now,
                promised_delivery_date=body.promised_delivery_date,
                status=INITIAL_STATUS,
                created_by=actor.user_id,
                created_at=now,
                updated_at=now,
                last_updated_by=actor.user_id,
            )
            ledger.set_labor_cost(order, body.cost_labor)
            ledger.set_pending_cost(order, body.cost_pending)
            apply_terms(
                order,
                calculate_warranty(
                    body.warranty_type,
                    now.date(),
                    body.warranty_start_date,
                    body.warranty_end_date,
                ),
            )
            for part_body in body.parts:
                await self._consume_part(db, order, part_body)

            order.order_number = format_order_number(await self._repo.next_order_number(db))
            await self._repo.save(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Order %s (%s) created in branch %s by %s",
            order.order_number,
            order.id,
            order.branch_id,
            actor.user_id,
        )
        return OrderResponse.from_domain(order)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_order(self, db: AsyncSession, order_id: str) -> OrderResponse:
        return OrderResponse.from_domain(await self._get_order(db, order_id))

    async def list_orders(
        self,
        db: AsyncSession,
        branch_id: str | None,
        statuses: list[OrderStatus] | None,
        client_id: str | None,
        cursor: str | None,
        limit: int,
        order_number: str | None = None,
        imei: str | None = None,
    ) -> OrderListResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        orders = await self._repo.list_orders(
            db,
            branch_id,
            statuses,
            client_id,
            cursor_id,
            limit + 1,
            order_number=order_number,
            imei=imei,
        )
        has_more = len(orders) > limit
        page = orders[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return OrderListResponse(
            items=[OrderSummary.from_domain(o) for o in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def list_alerts(self, db: AsyncSession, branch_id: str | None) -> AlertListResponse:
        orders = await self._repo.list_open(db, branch_id)
        thresholds = AlertThresholds(
            stale_quote_days=settings.STALE_QUOTE_DAYS,
            stale_pickup_days=settings.STALE_PICKUP_DAYS,
        )
        alerts = evaluate_alerts(orders, utc_now(), thresholds)
        items = [AlertResponse.from_domain(a) for a in alerts]
        return AlertListResponse(items=items, total=len(items))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def change_status(
        self, db: AsyncSession, order_id: str, body: StatusChangeRequest, actor: Actor
    ) -> OrderResponse:
        try:
            order = await self._lock_order(db, order_id)
            apply_transition(order, body.status, actor, utc_now())
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def update_order_details(
        self, db: AsyncSession, order_id: str, body: UpdateOrderRequest, actor: Actor
    ) -> OrderResponse:
        changes = body.model_dump(exclude_unset=True)
        try:
            order = await self._lock_order(db, order_id)
            for name, value in changes.items():
                if name != "checklist":
                    setattr(order, name, value)
            if order.imei_not_visible:
                order.device_imei = None
            elif not (order.device_imei or "").strip():
                raise ValidationError(
                    "device_imei", "device_imei is required unless imei_not_visible is set"
                )
            if "checklist" in changes or "unlock_pattern_provided" in changes:
                # Gate re-runs whenever either input of the rule changes
                order.checklist = normalize_checklist(
                    body.checklist if "checklist" in changes else order.checklist,
                    order.unlock_pattern_provided,
                )
            order.touch(actor.user_id, utc_now())
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def set_costs(
        self, db: AsyncSession, order_id: str, body: SetCostsRequest, actor: Actor
    ) -> OrderResponse:
        try:
            order = await self._lock_order(db, order_id)
            if body.cost_labor is not None:
                ledger.set_labor_cost(order, body.cost_labor)
            if body.cost_pending is not None:
                ledger.set_pending_cost(order, body.cost_pending)
            order.touch(actor.user_id, utc_now())
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def add_part(
        self, db: AsyncSession, order_id: str, body: AddPartRequest, actor: Actor
    ) -> OrderResponse:
        try:
            order = await self._lock_order(db, order_id)
            await self._consume_part(db, order, body)
            order.touch(actor.user_id, utc_now())
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def update_part_quantity(
        self,
        db: AsyncSession,
        order_id: str,
        line_index: int,
        body: UpdatePartLineRequest,
        actor: Actor,
    ) -> OrderResponse:
        try:
            order = await self._lock_order(db, order_id)
            delta = ledger.update_quantity(order, line_index, body.quantity)
            part_id = order.parts_used[line_index].part_id
            if delta > 0:
                await self._part_repo.adjust_stock(db, part_id, -delta)
            elif delta < 0:
                await self._return_stock(db, part_id, -delta)
            order.touch(actor.user_id, utc_now())
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def remove_part(
        self, db: AsyncSession, order_id: str, line_index: int, actor: Actor
    ) -> OrderResponse:
        try:
            order = await self._lock_order(db, order_id)
            line = ledger.remove_line(order, line_index)
            await self._return_stock(db, line.part_id, line.quantity)
            order.touch(actor.user_id, utc_now())
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def add_comment(
        self, db: AsyncSession, order_id: str, body: AddCommentRequest, actor: Actor
    ) -> CommentResponse:
        description = body.description.strip()
        if not description:
            raise ValidationError("description", "Comment text must not be blank")
        now = utc_now()
        comment = OrderComment(
            id=generate_comment_id(),
            user_id=actor.user_id,
            user_name=actor.user_name,
            description=description,
            timestamp=now,
        )
        try:
            await self._get_order(db, order_id)
            await self._repo.append_comment(db, order_id, comment, now)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return CommentResponse.from_domain(comment)

    async def set_warranty(
        self, db: AsyncSession, order_id: str, body: SetWarrantyRequest, actor: Actor
    ) -> OrderResponse:
        now = utc_now()
        try:
            order = await self._lock_order(db, order_id)
            terms = calculate_warranty(
                body.warranty_type,
                warranty_anchor(order, now.date()),
                body.warranty_start_date,
                body.warranty_end_date,
            )
            apply_terms(order, terms)
            order.warranty_covered_item = body.warranty_covered_item
            order.warranty_notes = body.warranty_notes
            order.touch(actor.user_id, now)
            await self._repo.update(db, order)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)

    async def recompute_warranty(
        self, db: AsyncSession, order_id: str, force: bool, actor: Actor
    ) -> OrderResponse:
        now = utc_now()
        try:
            order = await self._lock_order(db, order_id)
            changed = reanchor_warranty(order, warranty_anchor(order, now.date()), force=force)
            if changed:
                order.touch(actor.user_id, now)
                await self._repo.update(db, order)
            # Commit even when unchanged to release the row lock
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return OrderResponse.from_domain(order)
