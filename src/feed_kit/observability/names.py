# src/feed_kit/observability/names.py

"""Standard metric names for feed-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Source Metrics
# ============================================================================

# Counters
SOURCE_READS_TOTAL = "feed_source_reads_total"
SOURCE_EMPTY_READS_TOTAL = "feed_source_empty_reads_total"
SOURCE_BYTES_READ = "feed_source_bytes_read"
SOURCE_ERRORS_TOTAL = "feed_source_errors_total"


# ============================================================================
# Parser Metrics
# ============================================================================

# Duration
PARSER_PULL_DURATION = "feed_parser_pull_duration"

# Counters
PARSER_RECORDS_TOTAL = "feed_parser_records_total"
PARSER_RECORDS_DISCARDED = "feed_parser_records_discarded"
PARSER_MALFORMED_TOTAL = "feed_parser_malformed_total"

# Gauges
PARSER_BUFFER_SIZE = "feed_parser_buffer_size"
