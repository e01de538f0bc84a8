import json
import logging
import os

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud import firestore
from typing import Optional

from hotel_chat.core.config import Settings

logger = logging.getLogger(__name__)


def init_firebase(settings: Settings) -> bool:
    """
    Initializes the Firebase Admin SDK once per process.
    Prefers the inline service account JSON, falls back to the key file path.
    Returns True when an app is available afterwards.
    """
    try:
        firebase_admin.get_app()
        return True
    except ValueError:
        pass

    try:
        if settings.FIREBASE_SERVICE_ACCOUNT:
            service_account = json.loads(settings.FIREBASE_SERVICE_ACCOUNT)
            cred = credentials.Certificate(service_account)
            source = "FIREBASE_SERVICE_ACCOUNT"
        elif settings.GOOGLE_APPLICATION_CREDENTIALS:
            cred_path = settings.GOOGLE_APPLICATION_CREDENTIALS
            # Other Google Cloud libraries read the path from the environment
            os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = cred_path
            cred = credentials.Certificate(cred_path)
            source = f"key file {cred_path}"
        else:
            logger.error(
                "Neither FIREBASE_SERVICE_ACCOUNT nor GOOGLE_APPLICATION_CREDENTIALS is set."
            )
            return False

        firebase_admin.initialize_app(cred)
        logger.info(f"Firebase Admin SDK initialized using {source}.")
        return True
    except json.JSONDecodeError as e:
        logger.error(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {e}")
    except FileNotFoundError:
        logger.error(
            f"Firebase credentials file not found at path: {settings.GOOGLE_APPLICATION_CREDENTIALS}."
        )
    except Exception as e:
        logger.error(f"Failed to initialize Firebase Admin SDK: {e}", exc_info=True)
    return False


def create_firestore_client(settings: Settings) -> Optional[firestore.AsyncClient]:
    """
    Builds the async Firestore client bound to the Firebase app, so it uses the
    app's credential and project rather than Application Default Credentials.
    Returns None when Firebase could not be initialized.
    """
    if not init_firebase(settings):
        return None
    try:
        return firestore_async.client()
    except Exception as e:
        logger.error(f"Failed to create Firestore client: {e}", exc_info=True)
        return None
