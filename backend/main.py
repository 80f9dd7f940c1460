"""Backend entrypoint."""

from backend.factory import build_auth_service, build_storage, build_transaction_service
from shared.logging_setup import configure_logging


def create_backend_services() -> dict[str, object]:
    """Factory for backend service objects sharing one storage collaborator."""
    configure_logging()
    storage = build_storage()
    return {
        "storage": storage,
        "transaction_service": build_transaction_service(storage),
        "auth_service": build_auth_service(storage),
    }
