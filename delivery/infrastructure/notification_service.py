from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client
import logging
from delivery.core.config import settings
from delivery.interfaces.IUserRepository import IUserRepository

logger = logging.getLogger(__name__)

class NotificationService:
    def __init__(self, user_repo: IUserRepository, client: Client | None = None):
        self.user_repo = user_repo
        self.client = client
        self.enabled = client is not None

        # Only initialize if credentials exist in .env
        if self.client is None and settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN:
            try:
                self.client = Client(
                    settings.TWILIO_ACCOUNT_SID,
                    settings.TWILIO_AUTH_TOKEN,
                    http_client=TwilioHttpClient(timeout=settings.TWILIO_TIMEOUT_SECONDS),
                )
                self.enabled = True
                logger.info("✅ NotificationService: Twilio Client Initialized")
            except Exception as e:
                logger.error(f"❌ Failed to initialize Twilio Client: {e}")
        elif self.client is None:
            logger.warning("⚠️ NotificationService: Credentials missing in .env. Notifications disabled.")

    def notify_owner_new_order(self, payload: dict):
        """Sends a WhatsApp message to the owner of the restaurant that got the order.
        Subscribed to NEW_PENDING_ORDER, ``payload`` is ``{"order": ..., "owner_id": ...}``."""
        if not self.enabled or not settings.TWILIO_FROM_NUMBER:
            logger.debug("NotificationService disabled, skipping owner notification.")
            return

        order = payload["order"]
        owner = self.user_repo.get_user(payload["owner_id"])
        if owner is None or not owner.phone:
            logger.warning(f"⚠️ Owner {payload['owner_id']} has no phone, order {order['id']} not notified.")
            return

        # Format the message
        lines = []
        for item in order.get("items", []):
            picked = ", ".join(
                f"{option['name']}: {option['choice']}" if option.get("choice") else option["name"]
                for option in item.get("options", [])
            )
            name = item.get("dish_name") or f"Dish #{item['dish_id']}"
            lines.append(f"- {name}" + (f" ({picked})" if picked else ""))
        message_body = (
            f"🔔 *NEW ORDER #{order['id']}*\n\n"
            f"🛒 Items:\n" + "\n".join(lines) + "\n\n"
            f"💰 Total: {order['total']}"
        )

        try:
            # Twilio requires the "whatsapp:" prefix
            from_number = self._whatsapp(settings.TWILIO_FROM_NUMBER)
            to_number = self._whatsapp(owner.phone)

            self.client.messages.create(
                from_=from_number,
                body=message_body,
                to=to_number
            )
            logger.info(f"✅ Owner notification sent for order {order['id']}")
        except Exception as e:
            logger.error(f"❌ Failed to send owner notification: {e}")

    @staticmethod
    def _whatsapp(number: str) -> str:
        return number if number.startswith("whatsapp:") else f"whatsapp:{number}"
