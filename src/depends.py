from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.email_transport import create_email_transport
from src.adapter.services.notification_composer import JinjaNotificationComposer
from src.adapter.services.document_renderer import ReportLabDocumentRenderer
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.domain.currency import CurrencyFormatter
from src.domain.lifecycle import LifecycleStateMachine

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Stateless collaborators shared by every request
formatter = CurrencyFormatter(ApplicationConfig.CURRENCY_MINOR_UNITS)
state_machine = LifecycleStateMachine()
renderer = ReportLabDocumentRenderer(
    formatter,
    company_name=ApplicationConfig.COMPANY_NAME,
    company_address=ApplicationConfig.COMPANY_ADDRESS,
)

# One dispatcher per process so shutdown can drain in-flight deliveries
dispatcher = NotificationDispatcher(
    JinjaNotificationComposer(
        formatter,
        company_name=ApplicationConfig.COMPANY_NAME,
        admin_url=ApplicationConfig.ADMIN_URL,
    ),
    create_email_transport(
        ApplicationConfig.EMAIL_API_URL,
        ApplicationConfig.EMAIL_API_KEY,
        ApplicationConfig.NOTIFICATION_FROM,
    ),
    ApplicationConfig.NOTIFICATION_EMAIL,
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_formatter() -> CurrencyFormatter:
    return formatter


def get_state_machine() -> LifecycleStateMachine:
    return state_machine


def get_renderer() -> ReportLabDocumentRenderer:
    return renderer


def get_dispatcher() -> NotificationDispatcher:
    return dispatcher
