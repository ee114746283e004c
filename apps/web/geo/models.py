"""
Geo models - states and cities referenced by restaurant addresses.
"""

from django.db import models


class State(models.Model):
    """A federative unit (state or province)."""

    name = models.CharField(max_length=100)
    abbreviation = models.CharField(max_length=2, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.abbreviation


class City(models.Model):
    """A delivery city."""

    name = models.CharField(max_length=100)
    state = models.ForeignKey(
        State,
        on_delete=models.PROTECT,
        related_name="cities",
    )

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "cities"

    def __str__(self) -> str:
        return f"{self.name}/{self.state.abbreviation}"
