from __future__ import annotations

from fastapi import HTTPException, status

from linguachat.modules.session import (
    Rejection,
    SessionController,
    Transition,
    session_manager,
)

REJECTION_STATUS = {
    Rejection.NOT_CONFIGURED: status.HTTP_400_BAD_REQUEST,
    Rejection.BUSY: status.HTTP_409_CONFLICT,
    Rejection.INVALID_STATE: status.HTTP_409_CONFLICT,
    Rejection.EMPTY_INPUT: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


async def get_controller(session_id: str) -> SessionController:
    """Resolve the live session from the path, 404 when it is gone."""
    controller = session_manager.get(session_id)
    if not controller:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return controller


def ensure_accepted(transition: Transition) -> Transition:
    if transition.accepted:
        return transition
    rejection = transition.rejection or Rejection.INVALID_STATE
    raise HTTPException(
        status_code=REJECTION_STATUS[rejection],
        detail={
            "rejection": rejection.value,
            "message": transition.detail,
            "state": transition.state.value,
        },
    )
