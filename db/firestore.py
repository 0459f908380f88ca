# backend/db/firestore.py
import firebase_admin
from firebase_admin import credentials, firestore
import os
from typing import Optional, Mapping, Dict, List

from models.service_account import ServiceAccountInfo

# Environment variable -> service account field
CREDENTIAL_ENV_VARS: Dict[str, str] = {
    "type": "FIREBASE_TYPE",
    "project_id": "FIREBASE_PROJECT_ID",
    "private_key_id": "FIREBASE_PRIVATE_KEY_ID",
    "private_key": "FIREBASE_PRIVATE_KEY",
    "client_email": "FIREBASE_CLIENT_EMAIL",
    "client_id": "FIREBASE_CLIENT_ID",
    "auth_uri": "FIREBASE_AUTH_URI",
    "token_uri": "FIREBASE_TOKEN_URI",
    "auth_provider_x509_cert_url": "FIREBASE_AUTH_PROVIDER_X509_CERT_URL",
    "client_x509_cert_url": "FIREBASE_CLIENT_X509_CERT_URL",
}

REQUIRED_FIELDS: List[str] = ["type", "project_id", "private_key", "client_email"]


class FirebaseConfigError(ValueError):
    """Raised when the service account cannot be assembled from the environment"""


def load_service_account_info(environ: Optional[Mapping[str, str]] = None) -> ServiceAccountInfo:
    """
    Reads the FIREBASE_* variables into a ServiceAccountInfo.
    Private keys pasted into .env files carry literal '\\n' sequences; these
    are turned back into real newlines.
    """
    env = os.environ if environ is None else environ

    values = {}
    for field, var in CREDENTIAL_ENV_VARS.items():
        value = env.get(var)
        if value:
            values[field] = value

    missing = [CREDENTIAL_ENV_VARS[field] for field in REQUIRED_FIELDS if field not in values]
    if missing:
        raise FirebaseConfigError(f"Missing Firebase credential variables: {', '.join(missing)}")

    values["private_key"] = values["private_key"].replace("\\n", "\n")
    return ServiceAccountInfo(**values)


def initialize_firestore(info: Optional[ServiceAccountInfo] = None):
    """
    Initializes the Firebase Admin SDK with the service account.
    Ensures that initialization happens only once.
    """
    if firebase_admin._apps:
        print("Firebase Admin SDK already initialized")
        return firebase_admin.get_app()

    if info is None:
        info = load_service_account_info()

    try:
        print(f"🔑 Initializing Firebase Admin SDK for project: {info.project_id}")
        cred = credentials.Certificate(info.model_dump(exclude_none=True))
        app = firebase_admin.initialize_app(cred)
        print("✅ Firebase Admin SDK initialized with service account credentials.")
        return app
    except Exception as e:
        print(f"❌ Error initializing Firebase Admin SDK: {e}")
        raise


def get_firestore_client(info: Optional[ServiceAccountInfo] = None):
    """
    Returns a Firestore client for the default Firebase app.
    The caller owns the client for the lifetime of the process.
    """
    app = initialize_firestore(info)
    client = firestore.client(app=app)
    print(f"✅ Firestore client ready for project: {client.project}")
    return client
