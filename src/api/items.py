"""Item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from starlette.datastructures import UploadFile as StarletteUploadFile

from src.api.dependencies import (
    AdminUser,
    CurrentUser,
    DbSession,
    OptionalUser,
    Pages,
    get_item_service,
)
from src.api.projections import item_response
from src.exceptions import ValidationFailed
from src.models.enums import ItemStatus
from src.schemas.common import MessageResponse
from src.schemas.item import (
    ItemCreate,
    ItemEnvelope,
    ItemListResponse,
    ItemStatsResponse,
    ItemUpdate,
)
from src.services import queries
from src.services.image_storage import FIELD_NAME
from src.services.item_service import ItemService, ensure_owner_or_admin

router = APIRouter(prefix="/api/items", tags=["items"])

Service = Annotated[ItemService, Depends(get_item_service)]
Images = Annotated[list[UploadFile] | None, File(description="Up to 10 JPEG/PNG images")]
StatusFilter = Annotated[ItemStatus | None, Query()]
TextField = Annotated[str | None, Form()]

ITEM_FORM_FIELDS = (
    "title",
    "brand",
    "model",
    "description",
    "size",
    "color",
    "purchasePrice",
    "purchaseDate",
    "purchaseLocation",
)
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _supplied(**fields) -> dict:
    """Form fields the client actually sent."""
    return {name: value for name, value in fields.items() if value is not None}


# --- Public browsing ---


@router.get("/public", response_model=ItemListResponse)
def list_public_items(
    db: DbSession,
    viewer: OptionalUser,
    pages: Pages,
    status: StatusFilter = None,
):
    """Browse items without logging in."""
    items, pagination = queries.list_items(db, pages, status=status)
    return ItemListResponse(
        items=[item_response(item, viewer) for item in items],
        pagination=pagination,
    )


@router.get("/public/{item_id}", response_model=ItemEnvelope)
def get_public_item(item_id: int, viewer: OptionalUser, service: Service):
    """Get a single item without logging in."""
    return ItemEnvelope(item=item_response(service.get_item(item_id), viewer))


# --- Administration ---


@router.get("/stats", response_model=ItemStatsResponse)
def get_item_stats(admin: AdminUser, db: DbSession):
    """Count items per status."""
    return ItemStatsResponse(stats=queries.item_stats(db))


@router.get("", response_model=ItemListResponse)
def list_all_items(
    admin: AdminUser,
    db: DbSession,
    pages: Pages,
    status: StatusFilter = None,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
):
    """List every item, optionally filtered by status and owner."""
    items, pagination = queries.list_items(db, pages, status=status, user_id=user_id)
    return ItemListResponse(
        items=[item_response(item, admin) for item in items],
        pagination=pagination,
    )


# --- Owner operations ---


@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
async def create_item(
    current_user: CurrentUser,
    service: Service,
    title: Annotated[str, Form()],
    brand: Annotated[str, Form()],
    model: Annotated[str, Form()],
    description: TextField = None,
    size: TextField = None,
    color: TextField = None,
    purchase_price: Annotated[str | None, Form(alias="purchasePrice")] = None,
    purchase_date: Annotated[str | None, Form(alias="purchaseDate")] = None,
    purchase_location: Annotated[str | None, Form(alias="purchaseLocation")] = None,
    images: Images = None,
):
    """Submit an item for review, with up to 10 images.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    data = ItemCreate(
        **_supplied(
            title=title,
            brand=brand,
            model=model,
            description=description,
            size=size,
            color=color,
            purchase_price=purchase_price,
            purchase_date=purchase_date,
            purchase_location=purchase_location,
        )
    )
    pending = await service.storage.read_batch(images)
    item = service.create_item(data, pending, current_user)
    return ItemEnvelope(message="Item created successfully", item=item_response(item, current_user))


@router.get("/my-items", response_model=ItemListResponse)
def list_my_items(
    current_user: CurrentUser,
    db: DbSession,
    pages: Pages,
    status: StatusFilter = None,
):
    """List the caller's own items."""
    items, pagination = queries.list_items(db, pages, status=status, user_id=current_user.id)
    return ItemListResponse(
        items=[item_response(item, current_user) for item in items],
        pagination=pagination,
    )


@router.get("/{item_id}", response_model=ItemEnvelope)
def get_item(item_id: int, current_user: CurrentUser, service: Service):
    """Get an item owned by the caller (admins may read any item)."""
    item = service.get_item(item_id)
    ensure_owner_or_admin(item, current_user)
    return ItemEnvelope(item=item_response(item, current_user))


@router.put("/{item_id}", response_model=ItemEnvelope)
async def update_item(
    item_id: int,
    request: Request,
    current_user: CurrentUser,
    service: Service,
):
    """Update the supplied fields; uploaded images are appended.

    Accepts a JSON body or a form. Declared Form() parameters treat an empty
    value as absent, so the raw form is read: a key that is present counts as
    supplied, even when empty.
    """
    ensure_owner_or_admin(service.get_item(item_id), current_user)

    content_type = request.headers.get("content-type", "")
    images = []
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationFailed("Request body is not valid JSON") from None
        changes = ItemUpdate.model_validate(payload)
    elif not content_type or content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        changes = ItemUpdate.model_validate(
            {key: form[key] for key in ITEM_FORM_FIELDS if key in form}
        )
        images = [
            value for value in form.getlist(FIELD_NAME) if isinstance(value, StarletteUploadFile)
        ]
    else:
        raise ValidationFailed(f"Unsupported content type: {content_type}")

    pending = await service.storage.read_batch(images)
    item = service.update_item(item_id, changes, pending, current_user)
    return ItemEnvelope(message="Item updated successfully", item=item_response(item, current_user))


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(item_id: int, current_user: CurrentUser, service: Service):
    """Delete an item and its images."""
    service.delete_item(item_id, current_user)
    return MessageResponse(message="Item deleted successfully")
