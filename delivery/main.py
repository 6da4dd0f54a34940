import logging
import time
from fastapi import FastAPI
from sqlalchemy.exc import OperationalError
from delivery.core.config import settings

# 1. Infrastructure & Domain Imports
from delivery.domain import models  # noqa: F401 (registers tables on Base.metadata)
from delivery.domain.events import NEW_PENDING_ORDER
from delivery.infrastructure.database import engine, Base
from delivery.infrastructure.event_publisher import EventPublisher
from delivery.infrastructure.notification_service import NotificationService
from delivery.infrastructure.repositories.order_repository import SqlOrderRepository
from delivery.infrastructure.repositories.restaurant_repository import SqlRestaurantRepository
from delivery.infrastructure.repositories.user_repository import SqlUserRepository
from delivery.application.catalog import CatalogOrchestrator
from delivery.application.orchestrator import OrderOrchestrator
from delivery.interfaces import catalog_router, orders_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# ---------------------------------------------------------
# DATABASE CONNECTION (With Retry Logic)
# ---------------------------------------------------------
for attempt in range(settings.DB_CONNECT_RETRIES):
    try:
        logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{settings.DB_CONNECT_RETRIES})...")
        Base.metadata.create_all(bind=engine)
        logger.info("✅ DB Connected and Tables Created.")
        break
    except OperationalError:
        logger.warning(f"⚠️ DB not ready yet. Waiting {settings.DB_CONNECT_WAIT_SECONDS}s...")
        time.sleep(settings.DB_CONNECT_WAIT_SECONDS)
else:
    logger.error("❌ Could not connect to DB after retries.")

# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
user_repo = SqlUserRepository()
publisher = EventPublisher(
    redis_url=settings.REDIS_URL,
    channel_prefix=settings.EVENT_CHANNEL_PREFIX,
    max_workers=settings.EVENT_HANDLER_WORKERS,
)
notifier = NotificationService(user_repo=user_repo)
publisher.subscribe(NEW_PENDING_ORDER, notifier.notify_owner_new_order)

restaurant_repo = SqlRestaurantRepository()

app.state.user_repo = user_repo
app.state.catalog = CatalogOrchestrator(restaurant_repo=restaurant_repo)
app.state.orchestrator = OrderOrchestrator(
    order_repo=SqlOrderRepository(),
    restaurant_repo=restaurant_repo,
    publisher=publisher,
    strict_transitions=settings.STRICT_STATUS_TRANSITIONS,
)

# Include Routers
app.include_router(orders_router.router)
app.include_router(catalog_router.router)

@app.on_event("shutdown")
def stop_event_handlers():
    # Lets queued notifications go out before the process exits
    publisher.shutdown(wait=True)

@app.get("/")
def health_check():
    return {
        "status": "active",
        "system": "Order Orchestrator",
        "events": "redis" if publisher.redis_available else "in-process",
    }
