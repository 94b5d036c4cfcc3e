import pytest

from debtfree.ledger.schemas import Debt, DebtType
from debtfree.ledger.service import sample_ledger


@pytest.fixture
def sample_debts():
    return sample_ledger().snapshot()


@pytest.fixture
def single_loan():
    return (Debt(id=1, name="Loan", balance=100000, rate=12, emi=5000, type=DebtType.UNSECURED),)


@pytest.fixture
def underwater_loan():
    """EMI of 1000 against 2000 of monthly interest: never amortizes."""
    return (Debt(id=1, name="Payday", balance=100000, rate=24, emi=1000, type=DebtType.REVOLVING),)
