"""Item submission, editing and removal."""

import logging

from sqlalchemy.orm import Session

from src.exceptions import NotFound, PermissionDenied
from src.models.enums import ItemStatus
from src.models.item import Item
from src.models.user import User
from src.schemas.item import ItemCreate, ItemUpdate
from src.services.image_storage import ImageStorage, PendingImage

logger = logging.getLogger(__name__)


def can_manage_item(item: Item, user: User | None) -> bool:
    """Owners and administrators may see and change everything about an item."""
    return user is not None and (item.user_id == user.id or user.is_admin)


def ensure_owner_or_admin(item: Item, user: User) -> None:
    if not can_manage_item(item, user):
        raise PermissionDenied("Access denied")


class ItemService:
    """Service for item lifecycle operations."""

    def __init__(self, db: Session, storage: ImageStorage):
        self.db = db
        self.storage = storage

    def get_item(self, item_id: int) -> Item:
        item = self.db.query(Item).filter(Item.id == item_id).first()
        if item is None:
            raise NotFound("Item not found")
        return item

    def create_item(self, data: ItemCreate, images: list[PendingImage], owner: User) -> Item:
        """Store the images, then the item that references them."""
        records = self.storage.save_batch(images)

        item = Item(
            **data.model_dump(),
            images=records,
            status=ItemStatus.PENDING,
            user_id=owner.id,
        )
        self.db.add(item)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            self.storage.delete_files(records)
            raise

        self.db.refresh(item)
        logger.info(f"Item {item.id} submitted by user {owner.id} with {len(records)} image(s)")
        return item

    def update_item(
        self, item_id: int, changes: ItemUpdate, images: list[PendingImage], caller: User
    ) -> Item:
        """Apply supplied fields; new images extend the existing list."""
        item = self.get_item(item_id)
        ensure_owner_or_admin(item, caller)

        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(item, field, value)

        records = self.storage.save_batch(images)
        if records:
            item.images = [*(item.images or []), *records]

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            self.storage.delete_files(records)
            raise

        self.db.refresh(item)
        return item

    def delete_item(self, item_id: int, caller: User) -> None:
        """Delete the item, its evaluation and, best-effort, its image files."""
        item = self.get_item(item_id)
        ensure_owner_or_admin(item, caller)

        records = list(item.images or [])
        self.db.delete(item)
        self.db.commit()

        self.storage.delete_files(records)
        logger.info(f"Item {item_id} deleted by user {caller.id}")
