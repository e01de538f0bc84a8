from fastapi import Request
from firebase_admin import firestore

from hotel_chat.services.email_service import EmailService
from hotel_chat.services.notification_service import PushNotificationService

# Collaborator handles are created once in the app lifespan (or passed to
# create_app by tests) and stored on app.state.


def get_db(request: Request) -> firestore.AsyncClient:
    return request.app.state.db


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_push_service(request: Request) -> PushNotificationService:
    return request.app.state.push_service
