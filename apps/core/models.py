"""
Shared model mixins for the booking module.

Bookings and booking options are never physically removed while answers or
calendar entries may still point at them, so the main models soft-delete.
The admin works on `all_objects` and can bring deleted rows back.
"""
import uuid
from django.db import models
from django.utils import timezone


class UUIDModel(models.Model):
    """UUID primary key; option ids appear in public links."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SoftDeleteQuerySet(models.QuerySet):
    def delete(self):
        # Bulk deletes (the admin's delete action) only stamp the rows
        return self.update(deleted_at=timezone.now())

    def restore(self):
        return self.update(deleted_at=None)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """Hides soft-deleted rows unless built with include_deleted=True."""

    def __init__(self, include_deleted=False):
        super().__init__()
        self.include_deleted = include_deleted

    def get_queryset(self):
        qs = super().get_queryset()
        if self.include_deleted:
            return qs
        return qs.filter(deleted_at__isnull=True)


class SoftDeleteModel(models.Model):
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeleteManager()
    all_objects = SoftDeleteManager(include_deleted=True)

    class Meta:
        abstract = True

    def delete(self, *args, **kwargs):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at'])

    @property
    def is_deleted(self):
        return self.deleted_at is not None


class BaseModel(UUIDModel, TimestampedModel, SoftDeleteModel):
    """UUID pk + timestamps + soft delete, used by Booking and BookingOption."""
    class Meta:
        abstract = True
