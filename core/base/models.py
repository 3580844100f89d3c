from django.conf import settings
from django.db import models


class AuditMixin(models.Model):
    """
    Adds audit fields to track creation and modification metadata.

    Fields:
        - created_at: Timestamp when record was created
        - updated_at: Timestamp when record was last modified
        - created_by: User who created the record (optional)
        - updated_by: User who last modified the record (optional)

    Note: created_by and updated_by are set by the service layer from the
    requesting user.
    """
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when record was created"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when record was last modified"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_created',
        help_text="User who created this record"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_updated',
        help_text="User who last updated this record"
    )

    class Meta:
        abstract = True


class ActiveFlagMixin(models.Model):
    """
    Mixin for catalog rows that can be switched off without being deleted.

    Fields:
        - is_active: inactive rows stay referenced but cannot be newly assigned

    Methods:
        - deactivate()
        - update_fields(): set several fields, validate and save
    """
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True

    def deactivate(self):
        self.is_active = False
        self.save(update_fields=['is_active', 'updated_at'])

    def update_fields(self, field_updates: dict):
        """
        Apply a dict of field_name -> value, validate, and save.

        Example:
            department.update_fields({'name': 'Finance', 'is_active': False})
        """
        for field_name, value in field_updates.items():
            setattr(self, field_name, value)
        self.full_clean(validate_unique=False, validate_constraints=False)
        self.save()
        return self


class CatalogEntryMixin(ActiveFlagMixin, AuditMixin):
    """
    Name/code/description block shared by company-owned catalogs.

    Concrete models add the company foreign key and unique constraints on
    (company, name) and (company, code).
    """
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=30, null=True, blank=True)
    description = models.TextField(blank=True, default='')

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.name} ({self.code})" if self.code else self.name
