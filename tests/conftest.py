import itertools
from datetime import datetime

import pytest

from ledger import Ledger


@pytest.fixture
def ledger():
    counter = itertools.count(1)
    return Ledger(id_factory=lambda: f"id{next(counter)}", clock=lambda: datetime(2024, 5, 1, 12, 0))


@pytest.fixture
def abc(ledger):
    return [ledger.add_participant(n) for n in ("A", "B", "C")]
