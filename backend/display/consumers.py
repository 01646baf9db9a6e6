from channels.generic.websocket import AsyncJsonWebsocketConsumer
from channels.db import database_sync_to_async
import logging

from pricing.types import CartLine, CouponDiscount, FixedDiscount, Modifier, PercentageDiscount
from .exceptions import DisplayError
from .services import CartDisplayService, configure_port, display_config, get_display_controller
from .states import Total

logger = logging.getLogger(__name__)


def parse_line(data: dict) -> CartLine:
    return CartLine(
        product_id=str(data.get("product_id", "")),
        name=data.get("name") or "",
        unit_base_price=str(data.get("price", "0")),
        quantity=int(data.get("quantity", 1)),
        modifiers=[
            Modifier(id=str(m.get("id", "")), name=m.get("name") or "", price=str(m.get("price", "0")))
            for m in data.get("modifiers", [])
        ],
    )


def parse_discount(data):
    if not data:
        return None
    kind = data.get("type")
    if kind == "percentage":
        return PercentageDiscount(str(data["value"]))
    if kind == "fixed":
        return FixedDiscount(str(data["value"]))
    if kind == "coupon":
        return CouponDiscount(
            code=data.get("code", ""),
            value=str(data["value"]),
            type=data["coupon_type"],
            max_discount=str(data["max_discount"]) if data.get("max_discount") is not None else None,
        )
    raise ValueError(f"Unknown discount type '{kind}'")


class CustomerDisplayConsumer(AsyncJsonWebsocketConsumer):
    """
    Terminal-side socket that drives the customer pole display.

    Messages are {"action": ..., ...}; replies are {"type": ..., ...}.
    """

    async def connect(self):
        self.controller = get_display_controller()
        await self.accept()
        if display_config()["ENABLED"] and not self.controller.is_connected:
            await self.handle_connect({})
        else:
            await self.send_status()
        logger.info("Customer display socket connected")

    async def disconnect(self, close_code):
        logger.info(f"Customer display socket closed: code={close_code}")

    async def send_status(self):
        await self.send_json({"type": "display_status", **self.controller.status()})

    async def send_error(self, message):
        await self.send_json({"type": "error", "message": message})

    @database_sync_to_async
    def get_tax_rate(self):
        from shop_settings.config import app_settings
        return app_settings.tax_rate

    async def receive_json(self, content, **kwargs):
        action = content.get("action")
        logger.debug(f"Customer display action: {action}")

        try:
            if action == "connect":
                await self.handle_connect(content)
            elif action == "disconnect":
                await self.controller.disconnect()
                await self.send_status()
            elif action == "status":
                await self.send_status()
            elif action == "welcome":
                self.controller.request_state(self.controller.welcome)
            elif action == "cart_changed":
                await self.handle_cart_changed(content)
            elif action == "total":
                self.controller.request_state(Total(str(content.get("amount", "0"))))
            else:
                await self.send_error(f"Unknown action '{action}'")
        except (KeyError, ValueError, ArithmeticError) as e:
            await self.send_error(f"Invalid '{action}' message: {e}")

    async def handle_connect(self, content):
        if content.get("port"):
            configure_port(self.controller, content["port"], content.get("baud_rate", 9600))
        try:
            await self.controller.connect()
        except DisplayError as e:
            logger.warning(f"Customer display connect failed: {e}")
            await self.send_json({"type": "display_status", **self.controller.status(), "error": str(e)})
            return
        await self.send_status()

    async def handle_cart_changed(self, content):
        lines = [parse_line(line) for line in content.get("lines", [])]
        added_line = parse_line(content["added"]) if content.get("added") else None
        discount = parse_discount(content.get("discount"))

        service = CartDisplayService(self.controller, tax_rate=await self.get_tax_rate())
        service.on_cart_changed(lines, added_line=added_line, discount=discount)
