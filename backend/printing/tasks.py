"""
Celery tasks for deferred receipt printing.

Tasks:
- print_order_documents: Prints the receipt and/or kitchen docket for an order
"""
from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def print_order_documents(order_id, print_type="both"):
    """
    Render and print an order's documents on the configured printers.

    Never retried: a retry after a partial failure could print a second
    copy on the printers that already succeeded.
    """
    from orders.models import Order
    from orders.services import OrderService
    from shop_settings.config import app_settings
    from .services import print_order_sync

    try:
        order = Order.objects.prefetch_related("items__modifiers").get(pk=order_id)
    except Order.DoesNotExist:
        logger.error(f"Cannot print order {order_id}: order not found")
        return []

    printable = OrderService.build_printable_order(order)
    results = print_order_sync(
        printable,
        app_settings.get_shop_details(),
        print_type,
        app_settings.get_print_targets(),
    )

    for result in results:
        if not result.success:
            logger.error(
                f"Order #{order.order_number}: {result.kind} on '{result.printer}' failed "
                f"({result.error_code}): {result.error}"
            )
    return [result.as_dict() for result in results]
