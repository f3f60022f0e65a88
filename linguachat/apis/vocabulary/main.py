from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from linguachat.core.config import settings
from linguachat.apis.deps import get_controller
from linguachat.modules.session import SessionController
from linguachat.modules.vocabulary import Rejected, favorites_to_csv
from .schemas import FavoriteCreate, FavoriteCreated, FavoriteList, FavoriteRead


router = APIRouter()

Controller = Annotated[SessionController, Depends(get_controller)]

PREFIX = f"/{settings.app.version}/sessions/{{session_id}}/favorites"


@router.get(PREFIX, response_model=FavoriteList, tags=["vocabulary"])
async def list_favorites(controller: Controller, q: Optional[str] = None) -> FavoriteList:
    vocabulary = controller.session.vocabulary
    items = [FavoriteRead.from_favorite(f) for f in vocabulary.list(q)]
    return FavoriteList(items=items, total=len(vocabulary))


@router.post(
    PREFIX,
    response_model=FavoriteCreated,
    status_code=status.HTTP_201_CREATED,
    tags=["vocabulary"],
)
async def add_favorite(req: FavoriteCreate, controller: Controller) -> FavoriteCreated:
    try:
        result, effects = controller.save_favorite(req.word, req.translation, req.context)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if isinstance(result, Rejected):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "rejection": result.reason.value,
                "message": effects[0].message if effects else None,
                "word": result.word,
            },
        )
    return FavoriteCreated(favorite=FavoriteRead.from_favorite(result), effects=effects)


# Declared before the {fav_id} route so "export" is not taken for an id
@router.get(f"{PREFIX}/export", tags=["vocabulary"])
async def export_favorites(controller: Controller) -> Response:
    body = favorites_to_csv(controller.session.vocabulary.list())
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="favorites.csv"'},
    )


@router.delete(
    f"{PREFIX}/{{fav_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["vocabulary"],
)
async def remove_favorite(fav_id: str, controller: Controller) -> Response:
    # Removing an unknown id is a no-op
    controller.remove_favorite(fav_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(PREFIX, status_code=status.HTTP_204_NO_CONTENT, tags=["vocabulary"])
async def clear_favorites(controller: Controller) -> Response:
    controller.clear_favorites()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
