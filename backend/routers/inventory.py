import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import SpreadsheetError, UnsupportedFileType
from core.labels import build_qr_sheet, label_payload, render_qr_png
from core.row_mapper import map_rows
from core.spreadsheet import read_rows
from db.database import get_async_session
from db.store import InventoryStore
from schemas.inventory import InventoryItem, InventoryItemUpdate, QrLabel, UploadResult

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(item_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Inventory item with id {item_id} not found",
    )


@router.post("/upload", response_model=UploadResult)
async def upload_inventory(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Replace the whole inventory with the rows of an uploaded CSV or Excel file.

    Column names are guessed (see core.row_mapper); rows that cannot be read
    get default values instead of failing the upload. The previous inventory
    is only cleared once the file has been parsed.
    """
    content = await file.read()
    filename = file.filename or ""
    try:
        rows = read_rows(filename, content)
    except UnsupportedFileType as e:
        logger.warning("Rejected upload %r: unsupported file type", filename)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SpreadsheetError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Failed to parse file: {e}")

    items = map_rows(rows)
    try:
        n = await InventoryStore(db).replace_all(items)
    except Exception as e:
        await db.rollback()
        logger.exception("Failed to store uploaded inventory")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error storing inventory: {str(e)}",
        )
    logger.info("Uploaded %d inventory items from %s", n, filename)
    return UploadResult(uploaded=n, message=f"Successfully uploaded {n} items.")


@router.get("/items", response_model=List[InventoryItem])
async def list_inventory_items(db: AsyncSession = Depends(get_async_session)):
    return await InventoryStore(db).all()


@router.get("/items/{item_id}", response_model=InventoryItem)
async def get_inventory_item(item_id: str, db: AsyncSession = Depends(get_async_session)):
    item = await InventoryStore(db).get(item_id)
    if item is None:
        raise _not_found(item_id)
    return item


@router.patch("/items/{item_id}", response_model=InventoryItem)
async def update_inventory_item(
    item_id: str,
    changes: InventoryItemUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """Merge the supplied fields into an existing item."""
    store = InventoryStore(db)
    item = await store.update(item_id, changes.model_dump(exclude_unset=True))
    if item is None:
        raise _not_found(item_id)
    await store.commit()
    return item


@router.post("/clear")
async def clear_inventory(db: AsyncSession = Depends(get_async_session)):
    n = await InventoryStore(db).clear()
    logger.info("Cleared inventory (%d items)", n)
    return {"ok": True}


@router.get("/qr-sheet", response_model=Dict[str, List[QrLabel]])
async def qr_sheet(db: AsyncSession = Depends(get_async_session)):
    """Printable labels for every item, grouped by category."""
    return build_qr_sheet(await InventoryStore(db).all())


@router.get("/items/{item_id}/qr.png", response_class=Response)
async def item_qr_png(item_id: str, db: AsyncSession = Depends(get_async_session)):
    item = await InventoryStore(db).get(item_id)
    if item is None:
        raise _not_found(item_id)
    return Response(content=render_qr_png(label_payload(item)), media_type="image/png")
