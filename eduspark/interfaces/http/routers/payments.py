import stripe
import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from ....infrastructure.payments import PaymentGateway, get_payments
from ..authz import verify_token
from ..schemas import PaymentIntentReq, PaymentIntentResp

router = APIRouter(tags=["payments"])
logger = structlog.get_logger()


@router.post("/create-payment-intent", response_model=PaymentIntentResp, dependencies=[Depends(verify_token)])
def create_payment_intent(payload: PaymentIntentReq, payments: PaymentGateway = Depends(get_payments)):
    amount = int(round(payload.price * 100))
    try:
        client_secret = payments.create_intent(amount)
    except stripe.StripeError as e:
        logger.error("payment_intent_failed", amount=amount, error=str(e))
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, "payment provider error")
    return PaymentIntentResp(clientSecret=client_secret)
