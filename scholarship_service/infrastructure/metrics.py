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

cache_hits_total = Counter('cache_hits_total', 'Total cache hits')
cache_misses_total = Counter('cache_misses_total', 'Total cache misses')

applications_submitted_total = Counter('applications_submitted_total', 'Applications submitted')
application_transitions_total = Counter(
    'application_transitions_total',
    'Application status changes',
    ['status']
)
payment_intents_total = Counter(
    'payment_intents_total',
    'Payment intent requests',
    ['outcome']
)
auth_rejections_total = Counter(
    'auth_rejections_total',
    'Requests rejected by a guard',
    ['reason']
)


def metrics_endpoint():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
