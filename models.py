import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Tuple


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Participant:
    id: str
    name: str


@dataclass(frozen=True)
class Expense:
    id: str
    description: str
    amount: Decimal
    paid_by: str
    split_between: Tuple[str, ...]
    timestamp: datetime

    def involves(self, participant_id: str) -> bool:
        return self.paid_by == participant_id or participant_id in self.split_between

    @property
    def share(self) -> Decimal:
        return self.amount / len(self.split_between)


@dataclass(frozen=True)
class Settlement:
    from_id: str
    from_name: str
    to_id: str
    to_name: str
    amount: Decimal
