"""Print-side read models."""

from dataclasses import dataclass

from src.rs_branch.domain.models import BranchSettings
from src.rs_order.domain.models import Order


@dataclass(frozen=True)
class ClientInfo:
    """Read-only view of a client record; owned by the client directory."""

    id: str
    name: str
    last_name: str | None = None
    dni: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.last_name or ''}".strip()


@dataclass(frozen=True)
class PrintSource:
    """Everything a document needs, loaded once. Renderers never query."""

    order: Order
    client: ClientInfo
    live_settings: BranchSettings | None = None
