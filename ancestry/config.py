"""
Application configuration and environment variables
"""
import os

# Cache configuration (0 disables eviction)
CACHE_MAX_SIZE = int(os.environ.get('SAP_CACHE_MAX_SIZE', '10000'))

# Logging
LOG_LEVEL = os.environ.get('SAP_LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Graph loaded by the query service on first use
GRAPH_FILE = os.environ.get('SAP_GRAPH_FILE')

# API configuration
API_TITLE = "Shortest Ancestral Path API"
API_VERSION = "1.0.0"
RATE_LIMIT = os.environ.get('SAP_RATE_LIMIT', '120/minute')

# CORS origins
CORS_ORIGINS = [
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]
