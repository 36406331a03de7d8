"""
==============================================================================
Subscription Endpoints
==============================================================================

Newsletter sign-up. Stores the lead in the subscribers CSV and forwards it
to the CRM webhook in the background.

==============================================================================
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from app.schemas.subscription import SubscribeRequest, SubscribeResponse
from app.services.notifier import KommoNotifier
from app.services.subscription_service import SubscriptionService, get_subscription_service


router = APIRouter(prefix="/subscribe", tags=["Subscriptions"])


def get_notifier() -> KommoNotifier:
    """FastAPI dependency returning the webhook notifier."""
    return KommoNotifier()


@router.post("", response_model=SubscribeResponse)
async def subscribe(
    payload: SubscribeRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    service: SubscriptionService = Depends(get_subscription_service),
    notifier: KommoNotifier = Depends(get_notifier)
):
    """Subscribe to the newsletter with name, email and phone."""
    email = service.subscribe(payload, request.headers.get("user-agent", ""))

    background_tasks.add_task(notifier.post, {
        "source": "subscribe",
        "name": payload.name,
        "email": email,
        "phone": payload.phone,
    })

    return {"ok": True}
