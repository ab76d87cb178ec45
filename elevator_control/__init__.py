import time
from typing import Optional

from flask import Flask, g, request
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from flask_cors import CORS
from .api import init_api
from .config import Config
from .dispatcher import Dispatcher

request_counter = Counter('elevator_api_requests_total', 'Total API requests', ['endpoint', 'method'])
request_latency = Histogram('elevator_api_request_latency_seconds', 'API request latency', ['endpoint', 'method'])

def create_app(config: Optional[Config] = None, dispatcher: Optional[Dispatcher] = None):
    """Application factory function."""
    app = Flask(__name__)
    CORS(app)

    # Initialize configuration
    config = config or Config()

    # Build the fleet
    if dispatcher is None:
        dispatcher = Dispatcher(config.num_cars, config.num_floors)

    # Initialize API
    init_api(app, dispatcher)
    app.extensions['dispatcher'] = dispatcher

    @app.before_request
    def _before_request():
        g.request_started = time.perf_counter()

    @app.after_request
    def _after_request(response):
        endpoint = request.endpoint or 'unknown'
        request_counter.labels(endpoint, request.method).inc()
        started = g.get('request_started')
        if started is not None:
            request_latency.labels(endpoint, request.method).observe(time.perf_counter() - started)
        return response

    @app.route('/metrics')
    def metrics():
        return generate_latest(), 200, {'Content-Type': CONTENT_TYPE_LATEST}

    return app
