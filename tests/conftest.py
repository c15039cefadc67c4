"""
Shared fixtures: in-memory channel, catalog source and payment gateway.
"""
import os

# Settings are read at import time; configure before importing src
os.environ["TELEGRAM_BOT_TOKEN"] = "123456:TEST-TOKEN"
for _var in ("ADMIN_RECIPIENT_ID", "PAYSTACK_SECRET", "SHEET_ID", "SHEET_API_KEY"):
    os.environ.pop(_var, None)

import pytest

from src.core.checkout import CheckoutOrchestrator
from src.core.conversation import ConversationEngine, ConversationState, ConversationStep
from src.integrations.catalog import CatalogFetchError, CatalogGateway, CatalogSource
from src.integrations.messaging import MessageChannel
from src.integrations.payments import CheckoutSession, PaymentGatewayError, PaystackGateway

ADMIN_ID = "999"
USER_ID = "42"
PAYSTACK_SECRET = "sk_test_secret"
CALLBACK_URL = "https://bot.example.com/api/paystack/webhook"

CATEGORY_ROWS = [
    ["Category", "Description", "Type"],
    ["Fries", "Crispy fries", "Basic"],
    ["Wings", "Hot wings", "Basic"],
]

ITEM_ROWS = [
    ["Parent Category", "Item Name", "Price", "Options", "Type"],
    ["Fries", "Regular Fries", "2000", "Salted", "item"],
    ["Fries", "Red Hot Fries", "2,500", "Spicy", "item"],
    ["Wings", "Chilli Wings", "5500", "", "item"],
]


class FakeChannel(MessageChannel):
    """Records outbound messages."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send(self, recipient_id: str, text: str) -> bool:
        self.sent.append((recipient_id, text))
        return True

    def texts_for(self, recipient_id: str) -> list[str]:
        return [text for rid, text in self.sent if rid == recipient_id]

    def last(self, recipient_id: str) -> str:
        return self.texts_for(recipient_id)[-1]

    @property
    def name(self) -> str:
        return "fake"


class FakeCatalogSource(CatalogSource):
    """Serves fixed sheets; can be switched to fail."""

    def __init__(self, sheets: dict[str, list[list[str]]] | None = None):
        if sheets is None:
            sheets = {"Sheet1": CATEGORY_ROWS, "Sheet2": ITEM_ROWS}
        self.sheets = {name: [list(row) for row in rows] for name, rows in sheets.items()}
        self.fail = False
        self.calls: list[str] = []

    async def fetch(self, sheet_name: str) -> list[list[str]]:
        self.calls.append(sheet_name)
        if self.fail:
            raise CatalogFetchError("source down")
        return [list(row) for row in self.sheets[sheet_name]]

    @property
    def name(self) -> str:
        return "fake"


class FakeGateway(PaystackGateway):
    """Paystack gateway with the HTTP call replaced."""

    def __init__(self):
        super().__init__(secret_key=PAYSTACK_SECRET)
        self.fail = False
        self.calls: list[dict] = []
        self.counter = 0
        self.url_template = "https://checkout.paystack.com/ref{n}"

    async def create_checkout(self, amount_minor, customer_email, callback_url, metadata=None):
        self.calls.append({
            "amount_minor": amount_minor,
            "customer_email": customer_email,
            "callback_url": callback_url,
            "metadata": metadata,
        })
        if self.fail:
            raise PaymentGatewayError("gateway unreachable")
        self.counter += 1
        return CheckoutSession(
            checkout_url=self.url_template.format(n=self.counter),
            reference=f"ref{self.counter}",
        )


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def catalog_source():
    return FakeCatalogSource()


@pytest.fixture
def catalog(catalog_source):
    return CatalogGateway(source=catalog_source, categories_sheet="Sheet1", items_sheet="Sheet2")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def orchestrator(channel, gateway):
    return CheckoutOrchestrator(channel, gateway, admin_recipient_id=ADMIN_ID, callback_url=CALLBACK_URL)


@pytest.fixture
def engine(channel, catalog, orchestrator):
    return ConversationEngine(channel=channel, catalog=catalog, checkout=orchestrator)


@pytest.fixture
def state():
    """Session past the welcome message."""
    return ConversationState(user_id=USER_ID, step=ConversationStep.INIT)
