from prometheus_client import Counter, Gauge

from notebook_backend.config import config


def _registry_kwargs() -> dict:
    # unregistered metrics still count, they are just not exported
    return {"registry": None} if config.disable_metrics else {}


def prom_counter(name: str, desc: str, labels: tuple[str, ...] = ()) -> Counter:
    """Return a Prometheus Counter.

    If *labels* are provided, a labelled counter is created accordingly.
    """

    return Counter(name, desc, labels, **_registry_kwargs())


def prom_gauge(name: str, desc: str) -> Gauge:
    """Return a Prometheus Gauge."""
    return Gauge(name, desc, **_registry_kwargs())


CYCLE_REJECTED = prom_counter(
    "notebook_dependency_cycles_rejected_total",
    "Dependency insertions rejected because they would close a cycle",
)
STORE_FAILURES = prom_counter(
    "notebook_dependency_store_failures_total",
    "Dependency requests failed by the storage layer",
    ("operation",),
)
CRIT_PATH_LEN = prom_gauge(
    "notebook_critical_path",
    "Duration of the last computed critical path",
)
