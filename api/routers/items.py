"""
Items Router - CRUD over stored JSON documents

Reads consult the in-memory store first and fall back to the item files.
Writes go to memory, then to disk, with no transaction across the two: if the
file write fails the in-memory value stays updated and the request fails with
a 500. Replace, patch and delete only look at memory, so an item that exists
solely on disk (e.g. after a restart) is readable but answers 404 to them.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response

from jsonstash.errors import BadRequestError, ItemNotFoundError
from jsonstash.items import build_item, merge_item, new_item_id, replace_item
from api.dependencies import AppState, get_app_state, json_body, require_auth
from api.schemas.items import ErrorResponse, ItemCreatedResponse, ItemDeletedResponse

router = APIRouter()
logger = logging.getLogger(__name__)

NOT_FOUND = {404: {"model": ErrorResponse}}
AUTH_ERRORS = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


@router.get("")
async def list_items(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """
    Every item, keyed by ID.

    Starts from the in-memory snapshot and adds items that only exist on disk.
    Memory wins when both have an ID; disk hits are not copied into memory.
    """
    result = state.item_store.list_all()

    try:
        item_ids = state.repository.list_ids()
    except OSError as e:
        logger.error(f"Error reading data directory: {e}", exc_info=True)
        return result

    for item_id in item_ids:
        if item_id in result:
            continue
        try:
            result[item_id] = state.repository.read(item_id)
        except ItemNotFoundError:
            # deleted between listing and reading
            continue
        except Exception as e:
            logger.error(f"Error reading item file {item_id}: {e}")

    return result


@router.get("/{item_id}", responses=NOT_FOUND)
async def get_item(item_id: str, state: AppState = Depends(get_app_state)) -> Any:
    """One item: memory first, then its file."""
    item = state.item_store.get(item_id)
    if item is not None:
        return item

    logger.debug(f"Item {item_id} not in memory, falling back to disk")
    return state.repository.read(item_id)


@router.post(
    "",
    status_code=201,
    response_model=ItemCreatedResponse,
    responses=AUTH_ERRORS,
    dependencies=[Depends(require_auth)],
)
async def create_item(
    request: Request,
    response: Response,
    body: Any = Depends(json_body),
    state: AppState = Depends(get_app_state),
) -> ItemCreatedResponse:
    """Store a new document under a generated ID."""
    item_id = new_item_id()
    item = build_item(body)

    state.item_store.put(item_id, item)
    state.repository.write(item_id, item)

    url = str(request.url_for("get_item", item_id=item_id))
    response.headers["Location"] = url
    logger.info(f"Created item {item_id}")

    return ItemCreatedResponse(id=item_id, url=url, data=body)


@router.put(
    "/{item_id}",
    responses={**NOT_FOUND, **AUTH_ERRORS},
    dependencies=[Depends(require_auth)],
)
async def replace_existing_item(
    item_id: str,
    body: Any = Depends(json_body),
    state: AppState = Depends(get_app_state),
) -> Dict[str, Any]:
    """Replace an in-memory item completely."""
    existing = state.item_store.get(item_id)
    if existing is None:
        raise ItemNotFoundError(item_id)

    item = replace_item(existing, body, restamp=state.settings.restamp_on_update)
    state.item_store.put(item_id, item)
    state.repository.write(item_id, item)

    logger.info(f"Replaced item {item_id}")
    return item


@router.patch(
    "/{item_id}",
    responses={**NOT_FOUND, **AUTH_ERRORS},
    dependencies=[Depends(require_auth)],
)
async def update_item(
    item_id: str,
    updates: Any = Depends(json_body),
    state: AppState = Depends(get_app_state),
) -> Dict[str, Any]:
    """Merge top-level fields into an in-memory item."""
    if not isinstance(updates, dict):
        raise BadRequestError("Bad Request - Patch body must be a JSON object")

    existing = state.item_store.get(item_id)
    if existing is None:
        raise ItemNotFoundError(item_id)

    item = merge_item(existing, updates, restamp=state.settings.restamp_on_update)
    state.item_store.put(item_id, item)
    state.repository.write(item_id, item)

    logger.info(f"Updated item {item_id} ({', '.join(sorted(updates)) or 'no fields'})")
    return item


@router.delete(
    "/{item_id}",
    response_model=ItemDeletedResponse,
    responses={401: {"model": ErrorResponse}, **NOT_FOUND},
    dependencies=[Depends(require_auth)],
)
async def delete_item(item_id: str, state: AppState = Depends(get_app_state)) -> ItemDeletedResponse:
    """Remove an in-memory item and its file."""
    if not state.item_store.delete(item_id):
        raise ItemNotFoundError(item_id)

    state.repository.delete(item_id)

    logger.info(f"Deleted item {item_id}")
    return ItemDeletedResponse(message="Item deleted successfully", id=item_id)
