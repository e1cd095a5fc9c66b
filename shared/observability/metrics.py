from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_checkout_total = Counter(
    "ecomm_checkout_total",
    "Total checkouts processed",
    ["status"]  # Labels: 'success', 'rejected', 'failed'
)

ecomm_checkout_duration_seconds = Histogram(
    "ecomm_checkout_duration_seconds",
    "Checkout duration in seconds"
)

ecomm_cart_mutations_total = Counter(
    "ecomm_cart_mutations_total",
    "Cart mutations applied",
    ["operation"]  # Labels: 'set_item', 'remove_item'
)
