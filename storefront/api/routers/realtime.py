#storefront/api/routers/realtime.py
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import SortRequest
from storefront.services.product_service import ProductService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["realtime"])

SORT_EVENT = "sortProducts"
UPDATE_EVENT = "updateProducts"


def sorted_catalog(db: Session, raw: dict) -> dict:
    """Handles one sortProducts message and builds the reply for the requester."""
    try:
        request = SortRequest.model_validate(raw)
        products = ProductService(db).list_all(sort=request.sort)
    except PydanticValidationError:
        return {"event": UPDATE_EVENT, "error": "Malformed sort request"}
    except StorefrontError as e:
        logger.error(f"Error sorting products: {e}")
        return {"event": UPDATE_EVENT, "error": "Could not load products"}
    finally:
        # the socket keeps one session open, end the read so the next request sees fresh rows
        db.rollback()

    return {
        "event": UPDATE_EVENT,
        "products": [p.model_dump(mode="json") for p in products],
    }


@router.websocket("/ws/products")
async def products_socket(websocket: WebSocket, db: Session = Depends(get_db)):
    await websocket.accept()
    logger.info("New client connected")
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"event": UPDATE_EVENT, "error": "Malformed sort request"})
                continue

            if not isinstance(message, dict) or message.get("event", SORT_EVENT) != SORT_EVENT:
                logger.warning(f"Ignoring unknown realtime message: {message!r}")
                continue

            # reply goes to the requester only, nothing is broadcast
            await websocket.send_json(await run_in_threadpool(sorted_catalog, db, message))
    except WebSocketDisconnect:
        logger.info("Client disconnected")
