"""Order deletion: administrative command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.errors import NotFoundError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)
    requested_by = String(max_length=254)


@ordering.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        if not current_domain.repository_for(Order).remove(str(command.order_id)):
            raise NotFoundError("Order not found", {"order_id": [f"No order with id '{command.order_id}'"]})
        logger.info("Order deleted", order_id=str(command.order_id), requested_by=command.requested_by)
