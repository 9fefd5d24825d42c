"""Domain exceptions surfaced by the order engine and the API layer"""

from typing import Any, Dict, Optional


class FoodieHubError(Exception):
    """Base exception for all domain errors."""

    status_code = 500

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"detail": self.message, "error": type(self).__name__}
        payload.update({k: v for k, v in self.context.items() if v is not None})
        return payload


class NotFound(FoodieHubError):
    """Raised when a restaurant, product, coupon or order doesn't exist."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Any = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"{resource.capitalize()} not found",
            resource=resource,
            resource_id=str(resource_id) if resource_id is not None else None,
        )


class NotAvailable(FoodieHubError):
    """Raised when a restaurant is missing or inactive at checkout."""

    status_code = 400

    def __init__(self, message: str = "Restaurant not available", **context: Any):
        super().__init__(message, **context)


class ItemNotAvailable(NotAvailable):
    """Raised when a cart product is missing or unavailable."""

    def __init__(self, product_id: Any):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not available", product_id=str(product_id))


class ValidationFailed(FoodieHubError):
    """Raised when a request is well-formed but breaks an ordering rule."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, **context: Any):
        self.field = field
        super().__init__(message, field=field, **context)


class CrossRestaurantOrder(ValidationFailed):
    """Raised when a cart mixes products from different restaurants."""

    def __init__(self, product_id: Any, restaurant_id: Any):
        self.product_id = product_id
        super().__init__(
            "All items must be from the same restaurant",
            field="items",
            product_id=str(product_id),
            restaurant_id=str(restaurant_id),
        )


class BelowMinimumOrder(ValidationFailed):
    """Raised when the cart subtotal is under the restaurant minimum."""

    def __init__(self, min_order_cents: int, subtotal_cents: int):
        self.min_order_cents = min_order_cents
        self.subtotal_cents = subtotal_cents
        super().__init__(
            f"Minimum order amount is ${min_order_cents / 100:.2f}",
            field="items",
            min_order_cents=min_order_cents,
            subtotal_cents=subtotal_cents,
        )


class Unauthorized(FoodieHubError):
    """Raised when the actor lacks ownership or role for an action."""

    status_code = 403

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Not authorized to {action}", action=action)


class InvalidTransition(FoodieHubError):
    """Raised when an order status change isn't allowed from its current state."""

    status_code = 400

    def __init__(self, current: str, requested: str, message: Optional[str] = None):
        self.current = current
        self.requested = requested
        super().__init__(
            message or f"Order cannot move from {current} to {requested}",
            current_status=current,
            requested_status=requested,
        )
