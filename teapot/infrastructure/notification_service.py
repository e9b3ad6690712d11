import logging

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from teapot.core.config import settings
from teapot.domain.models import Order, format_money

logger = logging.getLogger(__name__)

class NotificationService:
    """WhatsApp ping to the staff phone whenever an order is placed."""

    def __init__(self, account_sid=None, auth_token=None, from_number=None, admin_number=None):
        self.client = None
        self.enabled = False
        self.from_number = from_number
        self.admin_number = admin_number

        # Only initialize if credentials exist in .env
        if account_sid and auth_token and from_number:
            try:
                self.client = Client(account_sid, auth_token)
                self.enabled = True
                print("✅ NotificationService: Twilio Client Initialized")
            except TwilioException as e:
                logger.error(f"❌ Failed to initialize Twilio Client: {e}")
        else:
            print("⚠️ NotificationService: Credentials missing in .env. Notifications disabled.")

    def notify_staff_new_order(self, order: Order) -> bool:
        if not self.enabled or not self.admin_number:
            logger.info("NotificationService disabled or admin number missing, skipping.")
            return False

        try:
            self.client.messages.create(
                from_=_whatsapp(self.from_number),
                body=format_order_message(order),
                to=_whatsapp(self.admin_number),
            )
        except Exception as e:
            # Twilio errors and transport errors from its HTTP client alike
            logger.error(f"❌ Failed to send staff notification: {e}")
            return False

        logger.info(f"✅ Staff notification sent to {self.admin_number}")
        return True


def format_order_message(order: Order) -> str:
    order_summary = "\n".join(f"- {item.quantity}x {item.name}" for item in order.items)
    return (
        f"🔔 *NEW ORDER*\n\n"
        f"📍 {order.delivery_info.address}\n"
        f"📞 {order.delivery_info.phone}\n"
        f"🛒 Items:\n{order_summary}\n\n"
        f"💰 Total: {format_money(order.total)}"
    )


def _whatsapp(number: str) -> str:
    # Twilio requires the "whatsapp:" prefix
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


def build_notifier() -> NotificationService:
    return NotificationService(
        account_sid=settings.TWILIO_ACCOUNT_SID,
        auth_token=settings.TWILIO_AUTH_TOKEN,
        from_number=settings.TWILIO_FROM_NUMBER,
        admin_number=settings.ADMIN_PHONE_NUMBER,
    )
