from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from linguachat.core.config import settings
from linguachat.apis.deps import ensure_accepted, get_controller
from linguachat.modules.gateway import NotConfiguredError
from linguachat.modules.session import SessionController, Transition, session_manager
from .schemas import (
    CaptureErrorRequest,
    ConfigureProviderRequest,
    CreateSessionRequest,
    SessionStateRead,
    SubmitRequest,
    TranslateRequest,
    TranslateResponse,
)


router = APIRouter()

Controller = Annotated[SessionController, Depends(get_controller)]

PREFIX = f"/{settings.app.version}/sessions"


def _to_state(controller: SessionController) -> SessionStateRead:
    session = controller.session
    provider = session.provider
    return SessionStateRead(
        id=session.id,
        state=session.state,
        configured=controller.is_configured,
        provider=provider.kind if provider else None,
        model=provider.model if provider else None,
        speech_output=session.speech_output,
        languages=session.languages,
        history=list(session.history.messages),
        created_at=session.created_at.isoformat().replace("+00:00", "Z"),
    )


@router.post(
    PREFIX,
    response_model=SessionStateRead,
    status_code=status.HTTP_201_CREATED,
    tags=["session"],
)
async def create_session(
    req: Optional[CreateSessionRequest] = Body(default=None),
) -> SessionStateRead:
    controller = session_manager.create(
        speech_output=req.speech_output if req else None
    )
    return _to_state(controller)


@router.get(
    f"{PREFIX}/{{session_id}}", response_model=SessionStateRead, tags=["session"]
)
async def get_session_state(controller: Controller) -> SessionStateRead:
    return _to_state(controller)


@router.delete(
    f"{PREFIX}/{{session_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["session"],
)
async def end_session(session_id: str) -> Response:
    if not session_manager.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    f"{PREFIX}/{{session_id}}/provider", response_model=Transition, tags=["session"]
)
async def configure_provider(
    req: ConfigureProviderRequest, controller: Controller
) -> Transition:
    return ensure_accepted(controller.configure(req.kind, req.api_key, req.model))


@router.post(
    f"{PREFIX}/{{session_id}}/capture/start",
    response_model=Transition,
    tags=["session"],
)
async def start_capture(controller: Controller) -> Transition:
    return ensure_accepted(controller.start_capture())


@router.post(
    f"{PREFIX}/{{session_id}}/capture/stop",
    response_model=Transition,
    tags=["session"],
)
async def stop_capture(controller: Controller) -> Transition:
    return ensure_accepted(controller.stop())


@router.post(
    f"{PREFIX}/{{session_id}}/capture/error",
    response_model=Transition,
    tags=["session"],
)
async def capture_error(req: CaptureErrorRequest, controller: Controller) -> Transition:
    return ensure_accepted(controller.capture_failed(req.message))


@router.post(
    f"{PREFIX}/{{session_id}}/capture/transcript",
    response_model=Transition,
    tags=["session"],
)
async def capture_transcript(req: SubmitRequest, controller: Controller) -> Transition:
    return ensure_accepted(await controller.transcribed(req.text))


@router.post(
    f"{PREFIX}/{{session_id}}/messages", response_model=Transition, tags=["session"]
)
async def submit_message(req: SubmitRequest, controller: Controller) -> Transition:
    return ensure_accepted(await controller.submit(req.text))


@router.delete(
    f"{PREFIX}/{{session_id}}/messages", response_model=Transition, tags=["session"]
)
async def clear_chat(controller: Controller) -> Transition:
    return ensure_accepted(controller.clear_chat())


@router.post(
    f"{PREFIX}/{{session_id}}/playback/finished",
    response_model=Transition,
    tags=["session"],
)
async def playback_finished(controller: Controller) -> Transition:
    return ensure_accepted(controller.playback_finished())


@router.post(
    f"{PREFIX}/{{session_id}}/translate",
    response_model=TranslateResponse,
    tags=["session"],
)
async def translate_word(req: TranslateRequest, controller: Controller) -> TranslateResponse:
    try:
        translation = await controller.translate_word(req.word)
    except NotConfiguredError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return TranslateResponse(word=req.word.strip(), translation=translation)
