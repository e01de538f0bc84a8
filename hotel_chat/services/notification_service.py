import asyncio
import logging
from typing import Callable, Dict, Iterable, List, Optional

from firebase_admin import messaging
from firebase_admin.exceptions import FirebaseError

from hotel_chat.models.notification import DispatchOutcome

logger = logging.getLogger(__name__)


class PushNotificationService:
    """
    Sends FCM notifications to device tokens.
    `send_func` defaults to firebase_admin.messaging.send and can be replaced in tests.
    """

    def __init__(self, send_func: Optional[Callable[[messaging.Message], str]] = None):
        self._send_func = send_func or messaging.send

    async def send(
        self, token: str, title: str, body: str, data: Dict[str, str]
    ) -> DispatchOutcome:
        message = messaging.Message(
            notification=messaging.Notification(title=title, body=body),
            data=data,
            token=token,
        )
        logger.info(f"Sending FCM message to token: {token}")
        try:
            # messaging.send is a blocking call, so run it in a separate thread
            response = await asyncio.to_thread(self._send_func, message)
            logger.info(f"Successfully sent FCM message to token {token}: {response}")
            return DispatchOutcome(token=token, success=True)
        except FirebaseError as e:
            logger.error(f"Error sending FCM message to token {token}: {e.code}")
            return DispatchOutcome(token=token, success=False, error=str(e.code))
        except Exception as e:
            logger.error(
                f"Unexpected error sending FCM message to token {token}: {e}", exc_info=True
            )
            return DispatchOutcome(token=token, success=False, error=type(e).__name__)

    async def send_to_tokens(
        self, tokens: Iterable[str], title: str, body: str, data: Dict[str, str]
    ) -> List[DispatchOutcome]:
        # Every send() settles to an outcome, so one failure never cancels the others.
        return list(
            await asyncio.gather(
                *(self.send(token, title, body, data) for token in tokens)
            )
        )


def count_successes(outcomes: Iterable[DispatchOutcome]) -> int:
    return sum(1 for outcome in outcomes if outcome.success)
