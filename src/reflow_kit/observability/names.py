# src/reflow_kit/observability/names.py

"""Standard metric names for reflow-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Extraction Metrics
# ============================================================================

# Duration
EXTRACTION_DURATION = "extraction_duration"

# Counters
EXTRACTION_PAGES_TOTAL = "extraction_pages_total"


# ============================================================================
# Aggregation Metrics
# ============================================================================

# Counters
AGGREGATION_BLOCKS_KEPT = "aggregation_blocks_kept"
AGGREGATION_BLOCKS_DROPPED = "aggregation_blocks_dropped"

# Gauges
AGGREGATION_TEXT_LENGTH = "aggregation_text_length"


# ============================================================================
# Pagination Metrics
# ============================================================================

# Duration
PAGINATION_DURATION = "pagination_duration"

# Counters
PAGINATION_PAGES_CREATED = "pagination_pages_created"
PAGINATION_SPLIT_CHUNKS = "pagination_split_chunks"

# Gauges
PAGINATION_CHARS_PER_PAGE = "pagination_chars_per_page"


# ============================================================================
# Locator Metrics
# ============================================================================

# Counters (labelled with by="offset" | "snippet")
LOCATOR_HITS_TOTAL = "locator_hits_total"
LOCATOR_MISSES_TOTAL = "locator_misses_total"


# ============================================================================
# Reading Progress Metrics
# ============================================================================

# Counters
PROGRESS_UPDATES_TOTAL = "progress_updates_total"
PROGRESS_ERRORS_TOTAL = "progress_errors_total"
