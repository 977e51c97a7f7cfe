"""Prometheus metrics for token issuance and response validation."""

from __future__ import annotations

from prometheus_client import Counter

tokens_issued_total = Counter(
    "hosted_page_tokens_issued_total",
    "Total hosted page tokens issued",
)

token_collisions_total = Counter(
    "hosted_page_token_collisions_total",
    "Candidate tokens rejected because they are still in the replay window",
)

validations_total = Counter(
    "hosted_page_validations_total",
    "Hosted page responses validated",
    ["result"],
)
