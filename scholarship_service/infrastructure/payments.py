import httpx
import structlog
from fastapi import Request

from ..application.use_cases.create_payment_intent import IPaymentGateway
from ..domain.errors import UpstreamFailure

logger = structlog.get_logger(__name__)


class StripePaymentGateway(IPaymentGateway):
    """Creates PaymentIntents through Stripe's REST API.

    Only the client secret is returned; confirmation happens client-side.
    """

    def __init__(self, client: httpx.Client, currency: str = "usd"):
        self.client = client
        self.currency = currency

    @classmethod
    def from_settings(cls, settings) -> "StripePaymentGateway":
        client = httpx.Client(
            base_url=settings.STRIPE_API_BASE,
            auth=(settings.STRIPE_SECRET_KEY, ""),
            timeout=settings.PAYMENT_TIMEOUT_SECONDS,
        )
        return cls(client, currency=settings.PAYMENT_CURRENCY)

    def create_intent(self, amount: int) -> str:
        data = {
            "amount": str(amount),
            "currency": self.currency,
            "payment_method_types[]": "card",
        }
        try:
            r = self.client.post("/v1/payment_intents", data=data)
        except httpx.HTTPError as e:
            logger.error("payment_intent_transport_error", error=type(e).__name__)
            raise UpstreamFailure("payment processor unreachable") from e
        if r.status_code != 200:
            logger.error("payment_intent_rejected", status_code=r.status_code)
            raise UpstreamFailure("payment processor rejected the request")
        secret = r.json().get("client_secret")
        if not secret:
            raise UpstreamFailure("payment processor returned no client secret")
        logger.info("payment_intent_created", amount=amount, currency=self.currency)
        return secret

    def close(self) -> None:
        self.client.close()


def get_payment_gateway(request: Request) -> IPaymentGateway:
    return request.app.state.payments
