# core/models/system_setting.py

from django.db import models


class SystemSetting(models.Model):
    """
    Key/value configuration edited by administrators
    (SMTP host, WhatsApp sender, storefront toggles, ...).

    Read through core.services.system_settings, never queried ad hoc.
    """

    class ValueType(models.TextChoices):
        STRING = "string", "String"
        INTEGER = "integer", "Integer"
        BOOLEAN = "boolean", "Boolean"
        DECIMAL = "decimal", "Decimal"
        JSON = "json", "JSON"

    key = models.CharField(max_length=120, unique=True)
    value = models.TextField(blank=True, default="")
    value_type = models.CharField(
        max_length=16,
        choices=ValueType.choices,
        default=ValueType.STRING,
    )
    category = models.CharField(max_length=60, default="general", db_index=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "key"]

    def __str__(self):
        return f"{self.category}.{self.key}"
