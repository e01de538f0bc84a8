"""
Pytest configuration and fixtures.
In-memory stand-ins for Firestore, the SMTP relay and FCM, injected through create_app.
"""

import smtplib

import pytest
from fastapi.testclient import TestClient
from firebase_admin.exceptions import FirebaseError

from hotel_chat.main import create_app
from hotel_chat.services.email_service import EmailService
from hotel_chat.services.notification_service import PushNotificationService


class FakeDocumentSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, documents, doc_id):
        self._documents = documents
        self.id = doc_id

    async def get(self):
        return FakeDocumentSnapshot(self.id, self._documents.get(self.id))


class FakeQuery:
    def __init__(self, documents, filters=()):
        self._documents = documents
        self._filters = list(filters)

    def where(self, filter):
        return FakeQuery(self._documents, self._filters + [filter])

    def _matches(self, data):
        for field_filter in self._filters:
            assert field_filter.op_string == "=="
            if data.get(field_filter.field_path) != field_filter.value:
                return False
        return True

    async def stream(self):
        for doc_id, data in list(self._documents.items()):
            if self._matches(data):
                yield FakeDocumentSnapshot(doc_id, data)


class FakeCollection(FakeQuery):
    def document(self, doc_id):
        return FakeDocumentReference(self._documents, doc_id)


class FakeFirestore:
    """Minimal firestore.AsyncClient: collection().document().get() and where().stream()."""

    def __init__(self):
        self.collections = {}

    def add(self, collection, doc_id, data):
        self.collections.setdefault(collection, {})[doc_id] = data

    def collection(self, name):
        return FakeCollection(self.collections.setdefault(name, {}))


class UnavailableFirestore:
    def collection(self, name):
        raise ConnectionError("Firestore unreachable")


class FakeSMTP:
    """Records messages instead of talking to a relay."""

    sent = []
    fail = False

    def __init__(self, host, port):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def login(self, username, password):
        if FakeSMTP.fail:
            raise smtplib.SMTPAuthenticationError(535, b"Username and Password not accepted")

    def send_message(self, message):
        FakeSMTP.sent.append(message)


class FakeMessaging:
    """Replacement for firebase_admin.messaging.send."""

    def __init__(self):
        self.messages = []
        self.failing_tokens = set()

    def send(self, message):
        self.messages.append(message)
        if message.token in self.failing_tokens:
            raise FirebaseError("messaging/registration-token-not-registered", "Token not registered")
        return f"projects/test/messages/{len(self.messages)}"

    @property
    def tokens(self):
        return [message.token for message in self.messages]


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def smtp():
    FakeSMTP.sent = []
    FakeSMTP.fail = False
    yield FakeSMTP
    FakeSMTP.sent = []
    FakeSMTP.fail = False


@pytest.fixture
def fcm():
    return FakeMessaging()


@pytest.fixture
def email_service(smtp):
    return EmailService(
        host="smtp.test",
        port=465,
        username="frontdesk@oceanview.test",
        password="secret",
        from_name="Ocean View Hotels",
        verify_url="https://guests.oceanview.test/verify.html",
        smtp_factory=smtp,
    )


@pytest.fixture
def push_service(fcm):
    return PushNotificationService(send_func=fcm.send)


@pytest.fixture
def client(db, email_service, push_service):
    app = create_app(db=db, email_service=email_service, push_service=push_service)
    with TestClient(app) as test_client:
        yield test_client
