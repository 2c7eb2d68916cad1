"""Metrics facade.

Service code should ONLY call the semantic helpers here so we can change backend freely.

Metrics:
- nps_submissions_total{outcome}      Monthly return submissions by outcome code
- nps_declarations_total{outcome}     Declarations by outcome code
- nps_report_fetches_total{outcome}   Monthly report page requests by outcome code
- nps_report_store_latency_seconds    Time spent waiting on report lookups
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

SUCCESS = "SUCCESS"

_SUBMISSIONS = Counter("nps_submissions_total", "Monthly return submissions", ["outcome"])
_DECLARATIONS = Counter("nps_declarations_total", "Declarations sent", ["outcome"])
_REPORT_FETCHES = Counter("nps_report_fetches_total", "Monthly report page requests", ["outcome"])
_REPORT_STORE_LATENCY = Histogram(
    "nps_report_store_latency_seconds",
    "Latency of monthly report lookups",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5),
)


def submission_handled(outcome: str = SUCCESS) -> None:
    _SUBMISSIONS.labels(outcome=outcome).inc()


def declaration_handled(outcome: str = SUCCESS) -> None:
    _DECLARATIONS.labels(outcome=outcome).inc()


def report_fetch_handled(outcome: str = SUCCESS) -> None:
    _REPORT_FETCHES.labels(outcome=outcome).inc()


def observe_report_store_latency(seconds: float) -> None:
    _REPORT_STORE_LATENCY.observe(seconds)


__all__ = [
    "SUCCESS",
    "submission_handled",
    "declaration_handled",
    "report_fetch_handled",
    "observe_report_store_latency",
]
