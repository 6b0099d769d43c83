"""
Prometheus counters for the ingestion pipeline (exposed at /metrics)
"""
from prometheus_client import Counter

INGESTION_EVENTS = Counter(
    "grocery_ingestion_events_total",
    "Input events processed by the ingestion orchestrator",
)

ENTRIES_CREATED = Counter(
    "grocery_entries_created_total",
    "Grocery entries created, by classification tier",
    ["tier"],
)

ENRICHMENT_RESULTS = Counter(
    "grocery_enrichment_total",
    "Background enrichment attempts, by outcome",
    ["outcome"],
)

PARSE_RESULTS = Counter(
    "grocery_parse_results_total",
    "Parsed ingredients, by confidence",
    ["confidence"],
)
