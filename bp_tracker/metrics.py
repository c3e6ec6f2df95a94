from prometheus_client import Counter, Histogram

# Histogram for API call latency (seconds)
bp_api_call_latency_seconds = Histogram(
    'bp_api_call_latency_seconds',
    'Latency of readings API calls in seconds',
    ['method', 'endpoint']
)

# Counter for total API calls
# status: success, error
bp_api_call_total = Counter(
    'bp_api_call_total',
    'Total readings API calls',
    ['method', 'endpoint', 'status']
)

# Counter for failed calls by error class (ServerError, RequestFailed, ...)
bp_api_errors_total = Counter(
    'bp_api_errors_total',
    'Total readings API errors by type',
    ['error_type']
)

# Coordinator refreshes (load_all), status: success, error
coordinator_refresh_total = Counter(
    'coordinator_refresh_total',
    'Total combined readings and stats refreshes',
    ['status']
)

__all__ = [
    'bp_api_call_latency_seconds',
    'bp_api_call_total',
    'bp_api_errors_total',
    'coordinator_refresh_total',
]
