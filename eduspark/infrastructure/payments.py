import stripe
import structlog

from ..config import settings

logger = structlog.get_logger()


class PaymentGateway:
    """Thin wrapper over Stripe PaymentIntents."""

    def __init__(self, api_key: str, currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    def create_intent(self, amount_cents: int) -> str:
        intent = stripe.PaymentIntent.create(
            amount=amount_cents,
            currency=self.currency,
            payment_method_types=["card"],
            api_key=self.api_key,
        )
        logger.info("payment_intent_created", intent_id=intent.id, amount=amount_cents)
        return intent.client_secret


def get_payments() -> PaymentGateway:
    return PaymentGateway(settings.STRIPE_SECRET_KEY)
