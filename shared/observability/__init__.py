from .setup import setup_observability
from .metrics import (
    ecomm_checkout_total,
    ecomm_checkout_duration_seconds,
    ecomm_cart_mutations_total,
)
