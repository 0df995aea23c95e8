"""Shared reference data: countries, cities, grade levels and program types."""
import uuid

from django.db import models


class LookupBase(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    name_en = models.CharField(max_length=100, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ("order", "name")

    def __str__(self) -> str:
        return self.name


class Country(LookupBase):
    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=8, null=True, blank=True)

    class Meta(LookupBase.Meta):
        db_table = "countries"
        verbose_name_plural = "countries"


class City(LookupBase):
    # PROTECT: a country cannot be deleted while cities reference it.
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name="cities")

    class Meta(LookupBase.Meta):
        db_table = "cities"
        verbose_name_plural = "cities"
        unique_together = [["country", "name"]]


class GradeLevel(LookupBase):
    name = models.CharField(max_length=100, unique=True)

    class Meta(LookupBase.Meta):
        db_table = "grade_levels"


class ProgramType(LookupBase):
    name = models.CharField(max_length=100, unique=True)

    class Meta(LookupBase.Meta):
        db_table = "program_types"
