"""
Kitchen models - the cuisine a restaurant belongs to.
"""

from django.db import models


class Kitchen(models.Model):
    """
    A kitchen (cuisine), e.g. Italian, Thai.

    Restaurants point at their kitchen; the reverse direction is queried
    explicitly (restaurant.services.restaurants_by_kitchen).
    """

    name = models.CharField(max_length=60)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
