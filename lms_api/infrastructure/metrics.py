from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

cache_hits_total = Counter('cache_hits_total', 'Total cache hits', ['entity'])
cache_misses_total = Counter('cache_misses_total', 'Total cache misses', ['entity'])
cache_invalidation_failures_total = Counter(
    'cache_invalidation_failures_total',
    'Cache keys that could not be removed after a write'
)

db_queries_total = Counter('db_queries_total', 'Total database queries issued on cache miss')

auth_failures_total = Counter('auth_failures_total', 'Failed login attempts')


def metrics_endpoint():
    """Prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
