import math

import structlog

from ..dto import PaymentIntentResult

logger = structlog.get_logger(__name__)


class IPaymentGateway:
    def create_intent(self, amount: int) -> str: ...


class CreatePaymentIntent:
    """Ask the payment processor for a client secret for `price` (major units).

    Missing, non-finite or sub-cent prices are ignored and yield no secret.
    """

    def __init__(self, gateway: IPaymentGateway):
        self.gateway = gateway

    def execute(self, price: float | None) -> PaymentIntentResult:
        if not price or not math.isfinite(price) or price * 100 < 1:
            logger.info("payment_intent_skipped", price=price)
            return PaymentIntentResult(client_secret=None)
        amount = int(round(price * 100))
        secret = self.gateway.create_intent(amount)
        return PaymentIntentResult(client_secret=secret, amount=amount)
