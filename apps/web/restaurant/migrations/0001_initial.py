import decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import apps.web.restaurant.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("geo", "0001_initial"),
        ("kitchen", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Restaurant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("code", models.CharField(default=apps.web.restaurant.models._new_code, editable=False, help_text="External identifier used by the API", max_length=36, unique=True)),
                ("name", models.CharField(max_length=80)),
                ("shipping_fee", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("is_active", models.BooleanField(default=False)),
                ("is_open", models.BooleanField(default=False)),
                ("address_zip_code", models.CharField(blank=True, max_length=9)),
                ("address_street", models.CharField(blank=True, max_length=100)),
                ("address_number", models.CharField(blank=True, max_length=20)),
                ("address_complement", models.CharField(blank=True, max_length=60)),
                ("address_district", models.CharField(blank=True, max_length=60)),
                ("address_city", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="restaurants", to="geo.city")),
                ("kitchen", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="restaurants", to="kitchen.kitchen")),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["kitchen", "name"], name="restaurant_kitchen_name_idx"),
                    models.Index(fields=["is_active", "is_open"], name="restaurant_active_open_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("is_open", False), ("is_active", True), _connector="OR"), name="restaurant_open_requires_active"),
                    models.CheckConstraint(condition=models.Q(("shipping_fee__gte", 0)), name="restaurant_shipping_fee_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=80)),
                ("description", models.TextField(blank=True)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("active", models.BooleanField(default=True)),
                ("restaurant", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="products", to="restaurant.restaurant")),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["restaurant", "active"], name="product_restaurant_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductPhoto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("file_name", models.CharField(max_length=150)),
                ("description", models.CharField(blank=True, max_length=150)),
                ("content_type", models.CharField(max_length=80)),
                ("size", models.PositiveIntegerField(help_text="Size in bytes")),
                ("storage_path", models.CharField(max_length=255)),
                ("product", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="photo", to="restaurant.product")),
            ],
        ),
    ]
