import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401
from config import ApplicationConfig
from src.adapter.services.notification_composer import JinjaNotificationComposer
from src.app.services.email_transport import EmailMessage, EmailTransport
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.depends import get_session, get_dispatcher
from src.domain.currency import CurrencyFormatter
from src.domain.lifecycle import LifecycleStateMachine
from src.domain.party import Party


class RecordingTransport(EmailTransport):
    """Keeps every message instead of sending it"""

    def __init__(self):
        self.messages = []

    async def send(self, message: EmailMessage) -> None:
        self.messages.append(message)


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database file per test"""
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'documents_test.db'}"
    engine = create_async_engine(db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def clients(db_session):
    """Client records the documents are addressed to"""
    db_session.add(Party(id="client_acme", name="Acme Corp", email="billing@acme.example"))
    db_session.add(Party(id="client_globex", name="Globex"))
    await db_session.commit()


@pytest.fixture
def formatter():
    return CurrencyFormatter(ApplicationConfig.CURRENCY_MINOR_UNITS)


@pytest.fixture
def state_machine():
    return LifecycleStateMachine()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def dispatcher(formatter, transport):
    return NotificationDispatcher(
        JinjaNotificationComposer(formatter, company_name="Test Agency"),
        transport,
        "team@agency.test",
    )


@pytest_asyncio.fixture
async def client(db_session, dispatcher):
    """Create test client with database session and dispatcher overrides"""
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    await dispatcher.drain()
