import functools
import logging

from django.conf import settings

from pricing.calculators import price_cart
from .controller import CustomerDisplayController
from .serial_port import DEFAULT_BAUD_RATE, DEFAULT_PORT, SerialConnection
from .states import DEFAULT_WIDTH, Welcome, state_for_cart

logger = logging.getLogger(__name__)

_controller = None


def display_config() -> dict:
    config = {
        "ENABLED": False,
        "PORT": DEFAULT_PORT,
        "BAUD_RATE": DEFAULT_BAUD_RATE,
        "WIDTH": DEFAULT_WIDTH,
        "CURRENCY_SYMBOL": "$",
        "WELCOME_TITLE": "Welcome",
        "WELCOME_SUBTITLE": "",
    }
    config.update(getattr(settings, "CUSTOMER_DISPLAY", {}))
    return config


def get_display_controller() -> CustomerDisplayController:
    """
    The process-wide display controller, built lazily from
    settings.CUSTOMER_DISPLAY. There is one physical display per terminal,
    so every consumer shares this instance.
    """
    global _controller
    if _controller is None:
        config = display_config()
        _controller = CustomerDisplayController(
            connection_factory=functools.partial(SerialConnection, config["PORT"], int(config["BAUD_RATE"])),
            width=int(config["WIDTH"]),
            symbol=config["CURRENCY_SYMBOL"],
            welcome=Welcome(config["WELCOME_TITLE"], config["WELCOME_SUBTITLE"]),
        )
    return _controller


def reset_display_controller():
    global _controller
    _controller = None


def configure_port(controller: CustomerDisplayController, port: str, baud_rate: int = DEFAULT_BAUD_RATE):
    """Point the controller at a different serial port for the next connect()."""
    controller.connection_factory = functools.partial(SerialConnection, port, int(baud_rate))
    logger.info(f"Customer display port set to {port} at {baud_rate} baud")


class CartDisplayService:
    """
    Translates cart changes into display states. The cart is priced with
    the same calculator as orders, so the display total matches the receipt.
    """

    def __init__(self, controller: CustomerDisplayController, tax_rate=0):
        self.controller = controller
        self.tax_rate = tax_rate

    def on_cart_changed(self, lines, added_line=None, discount=None):
        priced = price_cart(lines, discount=discount, tax_rate=self.tax_rate)
        state = state_for_cart(lines, added_line, priced.total, welcome=self.controller.welcome)
        self.controller.request_state(state)
        return state
