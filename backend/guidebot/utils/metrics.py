# /guidebot/utils/metrics.py

from prometheus_client import Counter, Histogram

# All Prometheus metrics used by the resolver live here.

# Resolution Metrics
node_resolutions_counter = Counter('node_resolutions_total', 'Node resolutions served', ['endpoint', 'status'])
augmentation_operations_counter = Counter('augmentation_operations_total', 'Augmentation rule outcomes', ['rule', 'status'])
response_time_histogram = Histogram('response_time_seconds', 'Response time in seconds', ['endpoint'])

# Store Metrics
database_operations_counter = Counter('database_operations_total', 'Database operations', ['operation', 'status'])
cache_operations = Counter('cache_operations_total', 'Cache operations', ['operation', 'status'])
