"""
Product services - a restaurant's products and their photos.

Products are always reached through their restaurant's code; a product id
that belongs to another restaurant is reported as not found.
"""

import logging
import uuid
from pathlib import PurePath

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import QuerySet

from apps.web.core.exceptions import NotFound, RequestValidationError
from apps.web.core.pagination import Page, PageRequest, paginate
from apps.web.restaurant.models import Product, ProductPhoto
from apps.web.restaurant.serializers import ProductInput
from apps.web.restaurant.services import find_by_code

logger = logging.getLogger(__name__)


class ProductNotFound(NotFound):
    """No product with this id in the restaurant."""

    def __init__(self, code: str, product_id: int) -> None:
        super().__init__(
            f"There is no product with id {product_id} in restaurant '{code}'"
        )
        self.product_id = product_id


class PhotoNotFound(NotFound):
    """The product has no photo."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} has no photo")
        self.product_id = product_id


def _products(code: str) -> QuerySet[Product]:
    restaurant = find_by_code(code)
    return Product.objects.filter(restaurant=restaurant)


def find_products(
    code: str, page_request: PageRequest, include_inactive: bool = False
) -> Page[Product]:
    """
    List a restaurant's products.

    Raises:
        RestaurantNotFound: If no restaurant has that code
    """
    queryset = _products(code)
    if not include_inactive:
        queryset = queryset.filter(active=True)
    return paginate(queryset.order_by("name", "pk"), page_request)


def find_product(code: str, product_id: int) -> Product:
    """
    Get a product of a restaurant.

    Raises:
        RestaurantNotFound: If no restaurant has that code
        ProductNotFound: If the product is not in that restaurant
    """
    try:
        return _products(code).get(pk=product_id)
    except Product.DoesNotExist as exc:
        raise ProductNotFound(code, product_id) from exc


def create_product(code: str, data: ProductInput) -> Product:
    """Add a product to a restaurant."""
    restaurant = find_by_code(code)
    product = Product.objects.create(
        restaurant=restaurant,
        name=data.name,
        description=data.description,
        price=data.price,
        active=data.active,
    )
    logger.info("Created product %s for restaurant %s", product.pk, code)
    return product


@transaction.atomic
def update_product(code: str, product_id: int, data: ProductInput) -> Product:
    """Overwrite a product's fields."""
    product = find_product(code, product_id)
    product.name = data.name
    product.description = data.description
    product.price = data.price
    product.active = data.active
    product.save(
        update_fields=["name", "description", "price", "active", "updated_at"]
    )
    return product


# =============================================================================
# Photos
# =============================================================================


def _file_name(upload: UploadedFile) -> str:
    return PurePath(upload.name or "photo").name


def validate_photo_upload(
    upload: UploadedFile | None, description: str = ""
) -> UploadedFile:
    """
    Check an uploaded photo and its description against the stored limits.

    Raises:
        RequestValidationError: If the upload is missing or not acceptable
    """
    if upload is None:
        raise RequestValidationError(
            [{"field": "file", "message": "File is required"}]
        )

    errors = []
    allowed = settings.PHOTO_CONTENT_TYPES
    if upload.content_type not in allowed:
        errors.append(
            {
                "field": "file",
                "message": f"Content type must be one of: {', '.join(allowed)}",
            }
        )
    if upload.size is None or upload.size > settings.PHOTO_MAX_SIZE:
        errors.append(
            {
                "field": "file",
                "message": f"File must be at most {settings.PHOTO_MAX_SIZE} bytes",
            }
        )
    name_limit = ProductPhoto._meta.get_field("file_name").max_length
    if len(_file_name(upload)) > name_limit:
        errors.append(
            {
                "field": "file",
                "message": f"File name must be at most {name_limit} characters",
            }
        )
    description_limit = ProductPhoto._meta.get_field("description").max_length
    if len(description) > description_limit:
        errors.append(
            {
                "field": "description",
                "message": (
                    f"Description must be at most {description_limit} characters"
                ),
            }
        )
    if errors:
        raise RequestValidationError(errors)
    return upload


def find_photo(code: str, product_id: int) -> ProductPhoto:
    """
    Get a product's photo metadata.

    Raises:
        PhotoNotFound: If the product has no photo
    """
    product = find_product(code, product_id)
    try:
        return ProductPhoto.objects.get(product=product)
    except ProductPhoto.DoesNotExist as exc:
        raise PhotoNotFound(product_id) from exc


def save_photo(
    code: str, product_id: int, upload: UploadedFile | None, description: str = ""
) -> ProductPhoto:
    """
    Store a product photo, replacing any previous one.

    Raises:
        RequestValidationError: If the upload is missing or not acceptable
    """
    upload = validate_photo_upload(upload, description)
    product = find_product(code, product_id)

    original_name = _file_name(upload)
    storage_path = default_storage.save(
        f"products/{uuid.uuid4()}_{original_name}", upload
    )

    try:
        with transaction.atomic():
            previous = ProductPhoto.objects.select_for_update().filter(
                product=product
            )
            old_paths = list(previous.values_list("storage_path", flat=True))
            previous.delete()
            photo = ProductPhoto.objects.create(
                product=product,
                file_name=original_name,
                description=description,
                content_type=upload.content_type or "",
                size=upload.size or 0,
                storage_path=storage_path,
            )
    except Exception:
        # The new file is only kept once its row is committed.
        default_storage.delete(storage_path)
        raise

    for path in old_paths:
        default_storage.delete(path)

    logger.info("Stored photo for product %s (%d bytes)", product_id, photo.size)
    return photo


def delete_photo(code: str, product_id: int) -> None:
    """
    Remove a product's photo.

    Raises:
        PhotoNotFound: If the product has no photo
    """
    photo = find_photo(code, product_id)
    storage_path = photo.storage_path
    photo.delete()
    default_storage.delete(storage_path)
    logger.info("Deleted photo for product %s", product_id)
