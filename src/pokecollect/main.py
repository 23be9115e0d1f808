"""
Application entry point: wires the client layer together and restores the session.
"""
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import requests

from pokecollect.api.auth_client import AuthClient
from pokecollect.api.base_client import ApiClient
from pokecollect.api.card_sets_client import CardSetsClient
from pokecollect.api.cards_client import CardsClient
from pokecollect.api.collection_client import CollectionClient
from pokecollect.config.settings import settings
from pokecollect.core.event_bus import EventBus
from pokecollect.services.browse_service import BrowseService
from pokecollect.services.collection_service import CollectionService
from pokecollect.services.image_service import ImageCacheService
from pokecollect.services.password_reset_service import PasswordResetService
from pokecollect.services.session_service import SessionService
from pokecollect.utils.logger import logger
from pokecollect.utils.security import SecretStore, create_secret_store


@dataclass
class AppContext:
    """Every long-lived client and service, built once per process."""
    secret_store: SecretStore
    api_client: ApiClient
    event_bus: EventBus
    auth_client: AuthClient
    card_sets_client: CardSetsClient
    cards_client: CardsClient
    collection_client: CollectionClient
    image_service: ImageCacheService
    session_service: SessionService
    password_reset_service: PasswordResetService
    browse_service: BrowseService
    collection_service: CollectionService

    def close(self):
        self.api_client.close()
        self.image_service.close()


def create_app(
    secret_store: Optional[SecretStore] = None,
    base_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
    image_session: Optional[requests.Session] = None,
    executor: Optional[ThreadPoolExecutor] = None,
) -> AppContext:
    """
    Build the application context.

    Every argument overrides the settings-driven default, which is how tests
    substitute an in-memory store or a fake HTTP session.
    """
    secret_store = secret_store if secret_store is not None else create_secret_store()
    api_client = ApiClient(secret_store, base_url=base_url, session=session)
    event_bus = EventBus()

    auth_client = AuthClient(api_client)
    card_sets_client = CardSetsClient(api_client)
    cards_client = CardsClient(api_client)
    collection_client = CollectionClient(api_client)

    return AppContext(
        secret_store=secret_store,
        api_client=api_client,
        event_bus=event_bus,
        auth_client=auth_client,
        card_sets_client=card_sets_client,
        cards_client=cards_client,
        collection_client=collection_client,
        image_service=ImageCacheService(session=image_session),
        session_service=SessionService(auth_client, secret_store, event_bus, executor=executor),
        password_reset_service=PasswordResetService(auth_client),
        browse_service=BrowseService(card_sets_client, cards_client),
        collection_service=CollectionService(collection_client),
    )


def main() -> int:
    settings.ensure_directories()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.API_BASE_URL})")

    app = create_app()
    try:
        pending = app.session_service.restore_session()
        if pending is not None:
            pending.result()

        state = app.session_service.state
        logger.info(f"Session restored: logged_in={state.is_logged_in}")
    finally:
        app.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
