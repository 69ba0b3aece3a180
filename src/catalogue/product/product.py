"""Product aggregate root with the Manager value object.

Quantity is the only field this service mutates after creation, and only
through the repository's relative decrement when an order is reconciled.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String, Text, ValueObject

from catalogue.domain import catalogue


@catalogue.value_object(part_of="Product")
class Manager:
    """The seller who owns a listing."""

    name: String(max_length=255, default="")
    email: String(required=True, max_length=254)


@catalogue.aggregate(limit=-1)
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    description: Text(default="")
    category: String(max_length=100, default="")
    image: String(max_length=2048, sanitize=False)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=0)
    manager: ValueObject(Manager, required=True)

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name is required"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        quantity,
        manager_email,
        manager_name="",
        description="",
        category="",
        image=None,
    ):
        if not manager_email:
            raise ValidationError({"manager": ["Manager email is required"]})

        return cls(
            name=name.strip() if name else name,
            description=description or "",
            category=category or "",
            image=image,
            price=price,
            quantity=quantity,
            manager=Manager(name=manager_name or "", email=manager_email),
        )
