"""
In-memory debt ledger.
Owns id assignment and editing; analysis functions only ever see snapshots.
"""
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from debtfree.core.logger import logger
from debtfree.ledger.schemas import Debt, DebtType

SAMPLE_MONTHLY_INCOME = 125000.0
SAMPLE_EXTRA_PAYMENT = 5000.0


class DebtNotFoundError(KeyError):
    """Raised when an operation targets an id that is not in the ledger."""

    def __init__(self, debt_id: int):
        super().__init__(debt_id)
        self.debt_id = debt_id

    def __str__(self) -> str:
        return f"Debt not found: id={self.debt_id}"


class DebtLedger:
    """
    Ordered collection of debts keyed by id.
    Insertion order is preserved; ids grow monotonically and are never reused.
    """

    def __init__(self) -> None:
        self._debts: List[Debt] = []
        self._next_id = 1

    @classmethod
    def from_debts(cls, debts: Iterable[Debt]) -> "DebtLedger":
        ledger = cls()
        for debt in debts:
            if any(existing.id == debt.id for existing in ledger._debts):
                raise ValueError(f"Duplicate debt id: {debt.id}")
            ledger._debts.append(debt)
            ledger._next_id = max(ledger._next_id, debt.id + 1)
        return ledger

    def add(
        self,
        name: str = "",
        balance: float = 0.0,
        rate: float = 0.0,
        emi: float = 0.0,
        type: DebtType = DebtType.UNSECURED
    ) -> Debt:
        """Validates and appends a new debt, assigning the next free id."""
        debt = Debt(id=self._next_id, name=name, balance=balance, rate=rate, emi=emi, type=type)
        self._debts.append(debt)
        self._next_id += 1
        logger.debug(f"Debt added: id={debt.id}, balance={debt.balance}, rate={debt.rate}")
        return debt

    def update(self, debt_id: int, **changes: Any) -> Debt:
        """
        Replaces a debt with a re-validated copy carrying the given changes.
        The ledger is left untouched if validation fails.
        """
        index = self._index_of(debt_id)
        if "id" in changes and changes["id"] != debt_id:
            raise ValueError("Debt id cannot be changed")
        data: Dict[str, Any] = self._debts[index].model_dump()
        data.update(changes)
        updated = Debt.model_validate(data)
        self._debts[index] = updated
        return updated

    def remove(self, debt_id: int) -> Debt:
        index = self._index_of(debt_id)
        removed = self._debts.pop(index)
        logger.debug(f"Debt removed: id={debt_id}")
        return removed

    def get(self, debt_id: int) -> Debt:
        return self._debts[self._index_of(debt_id)]

    def snapshot(self) -> Tuple[Debt, ...]:
        """Immutable view handed to the scoring and simulation functions."""
        return tuple(self._debts)

    def _index_of(self, debt_id: int) -> int:
        for i, debt in enumerate(self._debts):
            if debt.id == debt_id:
                return i
        raise DebtNotFoundError(debt_id)

    def __len__(self) -> int:
        return len(self._debts)

    def __iter__(self) -> Iterator[Debt]:
        return iter(tuple(self._debts))

    def __contains__(self, debt_id: object) -> bool:
        return any(debt.id == debt_id for debt in self._debts)


def sample_ledger() -> DebtLedger:
    """A typical household portfolio used as starter data."""
    ledger = DebtLedger()
    ledger.add("Home Loan (SBI)", 3200000, 8.50, 32000, DebtType.SECURED)
    ledger.add("Car Loan (HDFC)", 520000, 9.25, 14500, DebtType.SECURED)
    ledger.add("Personal Loan (ICICI)", 300000, 13.5, 10500, DebtType.UNSECURED)
    ledger.add("Credit Card (Axis)", 145000, 42.0, 12000, DebtType.REVOLVING)
    return ledger
