"""Shared failure codes reported alongside degraded chart renders."""

METRIC_NOT_FOUND = "metric_not_found"
EMPTY_RESULT_SET = "empty_result_set"

# the chart body is replaced by an error message
CRITICAL_FAILURES = [
    METRIC_NOT_FOUND,
]

# the chart renders with placeholder figures
DEGRADED_FAILURES = [
    EMPTY_RESULT_SET,
]
