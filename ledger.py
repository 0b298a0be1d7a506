import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Tuple

from config import UNKNOWN_NAME
from errors import NotFoundError, UnknownParticipantError, ValidationError
from logic import compute_balances, compute_settlements, parse_amount, total_expenses
from models import Expense, Participant, Settlement, new_id

logger = logging.getLogger(__name__)


class Ledger:
    """In-memory store of participants and the expenses between them.

    Every stored expense only refers to participants that are still present:
    removing a participant also removes the expenses they paid for or share in.
    Mutators either succeed completely or raise and leave the ledger untouched.
    """

    def __init__(self, id_factory: Callable[[], str] = new_id, clock: Callable[[], datetime] = datetime.now):
        self._participants: List[Participant] = []
        self._expenses: List[Expense] = []
        self._new_id = id_factory
        self._clock = clock
        self._lock = threading.RLock()

    @property
    def participants(self) -> Tuple[Participant, ...]:
        with self._lock:
            return tuple(self._participants)

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        with self._lock:
            return tuple(self._expenses)

    # --- Participants ---
    def add_participant(self, name: str) -> Participant:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Please enter a name.")
        with self._lock:
            participant = Participant(id=self._new_id(), name=name.strip())
            self._participants.append(participant)
        logger.info("Added participant %s (%s)", participant.name, participant.id)
        return participant

    def remove_participant(self, participant_id: str) -> List[Expense]:
        # Returns the expenses dropped along with the participant
        with self._lock:
            participant = self._find_participant(participant_id)
            removed = [e for e in self._expenses if e.involves(participant_id)]
            self._expenses = [e for e in self._expenses if not e.involves(participant_id)]
            self._participants.remove(participant)
        logger.info("Removed participant %s (%s) and %d expense(s)", participant.name, participant_id, len(removed))
        return removed

    def get_participant(self, participant_id: str) -> Participant:
        with self._lock:
            return self._find_participant(participant_id)

    def find_participant_name(self, participant_id: str) -> str:
        return self.participant_names().get(participant_id, UNKNOWN_NAME)

    def participant_names(self) -> Dict[str, str]:
        with self._lock:
            return {p.id: p.name for p in self._participants}

    # --- Expenses ---
    def add_expense(self, description: str, amount, paid_by: str, split_between: Iterable[str]) -> Expense:
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Please describe the expense (e.g., 'Groceries').")
        amount = parse_amount(amount)
        # Collapse duplicates, keep the order the ids were picked in
        split = tuple(dict.fromkeys(split_between or ()))
        if not split:
            raise ValidationError("Please select at least one participant to split with.")
        with self._lock:
            known = {p.id for p in self._participants}
            for pid in (paid_by,) + split:
                if pid not in known:
                    raise UnknownParticipantError(pid)
            expense = Expense(
                id=self._new_id(),
                description=description.strip(),
                amount=amount,
                paid_by=paid_by,
                split_between=split,
                timestamp=self._clock(),
            )
            self._expenses.append(expense)
        logger.info("Added expense %r of %s paid by %s split %d ways",
                    expense.description, expense.amount, paid_by, len(split))
        return expense

    def remove_expense(self, expense_id: str) -> Expense:
        with self._lock:
            expense = next((e for e in self._expenses if e.id == expense_id), None)
            if expense is None:
                raise NotFoundError("expense", expense_id)
            self._expenses.remove(expense)
        logger.info("Removed expense %r (%s)", expense.description, expense_id)
        return expense

    # --- Queries ---
    def snapshot(self) -> Tuple[Tuple[Participant, ...], Tuple[Expense, ...]]:
        # Both collections read under one lock acquisition
        with self._lock:
            return tuple(self._participants), tuple(self._expenses)

    def total_expenses(self) -> Decimal:
        return total_expenses(self.expenses)

    def balances(self) -> Dict[str, Decimal]:
        with self._lock:
            return compute_balances(self._participants, self._expenses)

    def settlements(self) -> List[Settlement]:
        with self._lock:
            balances = compute_balances(self._participants, self._expenses)
            names = {p.id: p.name for p in self._participants}
        return compute_settlements(balances, names)

    def _find_participant(self, participant_id: str) -> Participant:
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        raise NotFoundError("participant", participant_id)
