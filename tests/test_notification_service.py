import pytest
from firebase_admin import messaging

from hotel_chat.models.notification import DispatchOutcome
from hotel_chat.services.notification_service import (
    PushNotificationService,
    count_successes,
)

pytestmark = pytest.mark.asyncio


async def test_send_success(push_service, fcm):
    outcome = await push_service.send("tok-1", "Title", "Body", {"k": "v"})

    assert outcome == DispatchOutcome(token="tok-1", success=True)
    assert isinstance(fcm.messages[0], messaging.Message)


async def test_send_records_firebase_error_code(push_service, fcm):
    fcm.failing_tokens.add("tok-1")

    outcome = await push_service.send("tok-1", "Title", "Body", {})

    assert outcome.success is False
    assert outcome.error == "messaging/registration-token-not-registered"


async def test_unexpected_error_becomes_failed_outcome():
    def broken_send(message):
        raise TimeoutError("FCM did not answer")

    service = PushNotificationService(send_func=broken_send)
    outcome = await service.send("tok-1", "Title", "Body", {})

    assert outcome == DispatchOutcome(token="tok-1", success=False, error="TimeoutError")


async def test_one_failure_does_not_abort_siblings(push_service, fcm):
    fcm.failing_tokens.add("tok-2")

    outcomes = await push_service.send_to_tokens(
        ["tok-1", "tok-2", "tok-3"], "Title", "Body", {}
    )

    assert [o.token for o in outcomes] == ["tok-1", "tok-2", "tok-3"]
    assert [o.success for o in outcomes] == [True, False, True]
    assert count_successes(outcomes) == 2


async def test_every_resolved_token_is_dispatched(push_service, fcm):
    outcomes = await push_service.send_to_tokens(["tok-1", "tok-1"], "Title", "Body", {})

    assert len(outcomes) == 2
    assert fcm.tokens == ["tok-1", "tok-1"]
    assert count_successes(outcomes) == 2
