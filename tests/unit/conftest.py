import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.currency import CurrencyFormatter
from src.domain.lifecycle import LifecycleStateMachine

MINOR_UNITS = {"INR": 2, "USD": 2, "EUR": 2, "GBP": 2, "JPY": 0}


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def formatter():
    return CurrencyFormatter(MINOR_UNITS)


@pytest.fixture
def state_machine():
    return LifecycleStateMachine()


@pytest.fixture
def mock_dispatcher():
    """Dispatcher whose dispatch() only records events"""
    dispatcher = MagicMock()
    dispatcher.dispatch = MagicMock()
    return dispatcher


@pytest.fixture
def acme_line_items():
    return [
        {"description": "Social media retainer", "quantity": Decimal("2"), "unit_rate": Decimal("5000")},
        {"description": "Ad creative pack", "quantity": Decimal("1"), "unit_rate": Decimal("1500")},
    ]
