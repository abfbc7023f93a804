"""
API v1 routes.

Defines REST endpoints for the account activation API.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse

from src.api.dependencies import get_activation_workflow, get_notificator
from src.api.models import (
    NotificationModel,
    RepeatActivationRequest,
    SentPageData,
    StatusResponse,
)
from src.api.notifications import Notificator
from src.config.settings import Settings, get_settings
from src.domain.exceptions import AlreadyActivated, UserNotFound
from src.domain.workflow import ActivationWorkflow

router = APIRouter(prefix="/activation", tags=["v1"])

ACCESS_MODE_ANY = "any"

MESSAGES = {
    "repeat": "A new activation link has been sent to your email address.",
    "user_not_found": "No user is registered with this email address.",
    "already_activated": "This account has already been activated.",
    "success": "Your account has been activated.",
    "fail": "The activation link is invalid or has expired.",
}


def _envelope(status_keyword: str, notificator: Notificator) -> StatusResponse:
    return StatusResponse(
        status=status_keyword,
        notifications=[NotificationModel.from_notification(n) for n in notificator.notifications],
    )


@router.get(
    "/sent",
    response_model=StatusResponse,
    summary="Activation sent page data",
    description="Returns whether self-service signup is open and the captcha key "
    "required before re-sending an activation link.",
)
async def sent(settings: Settings = Depends(get_settings)) -> StatusResponse:
    data = SentPageData(
        access_mode_any=settings.access_mode == ACCESS_MODE_ANY,
        captcha_key=settings.captcha_key if settings.captcha_enabled else None,
    )
    return StatusResponse(status="success", data=data.model_dump())


@router.post(
    "/repeat",
    response_model=StatusResponse,
    responses={
        404: {"model": StatusResponse, "description": "User not found"},
        409: {"model": StatusResponse, "description": "User already activated"},
        422: {"description": "Validation error"},
    },
    summary="Re-send activation link",
    description="Issue a new activation code for a registered, not yet activated user "
    "and send the activation link by email. Any previous code stops working.",
)
def repeat(
    request_data: RepeatActivationRequest,
    response: Response,
    workflow: ActivationWorkflow = Depends(get_activation_workflow),
    notificator: Notificator = Depends(get_notificator),
) -> StatusResponse:
    """
    Re-send the activation link.

    - **email**: Email address the account was registered with
    """
    try:
        workflow.resend(request_data.email)
    except UserNotFound:
        response.status_code = status.HTTP_404_NOT_FOUND
        notificator.error(MESSAGES["user_not_found"])
        return _envelope("user_not_found", notificator)
    except AlreadyActivated:
        response.status_code = status.HTTP_409_CONFLICT
        notificator.error(MESSAGES["already_activated"])
        return _envelope("already_activated", notificator)

    notificator.success(MESSAGES["repeat"])
    return _envelope("success", notificator)


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Complete activation",
    description="Target of the emailed activation link. Redirects to the application "
    "with a flash notification telling whether the activation succeeded.",
)
def complete(
    code: str,
    workflow: ActivationWorkflow = Depends(get_activation_workflow),
    notificator: Notificator = Depends(get_notificator),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    # Unknown, expired and already used codes share one message
    if workflow.complete(code):
        notificator.success(MESSAGES["success"])
    else:
        notificator.error(MESSAGES["fail"])

    redirect = RedirectResponse(url=settings.app_url, status_code=status.HTTP_303_SEE_OTHER)
    notificator.flash(redirect)
    return redirect
