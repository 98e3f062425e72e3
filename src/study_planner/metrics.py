from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


RESOLUTIONS_TOTAL = get_or_create_metric(
    "planner_resolutions_total",
    "Resolutions by the strategy that produced the result",
    Counter,
    labelnames=["resolver", "strategy"],
)

RESOLUTION_FAILURES_TOTAL = get_or_create_metric(
    "planner_resolution_failures_total",
    "Strategy attempts that failed and fell through to the next tier",
    Counter,
    labelnames=["resolver", "strategy", "reason"],
)

REQUESTS_TOTAL = get_or_create_metric(
    "planner_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "planner_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)
