"""HTTP hardening: security headers and per-address request rate limiting.

Socket.IO traffic is served by the Engine.IO middleware in front of Flask and
never reaches these hooks; connection admission for sockets lives in the
connect handler instead.
"""
import math

from flask import current_app, jsonify, request

from relay.services.rooms import client_address

HTTP_RATE_LIMIT_MESSAGE = 'Too many requests from this IP, please try again later.'

# Content-Security-Policy is left unset so pages with inline scripts keep working
SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
    'Strict-Transport-Security': 'max-age=15552000; includeSubDomains',
    'X-DNS-Prefetch-Control': 'off',
    'X-Download-Options': 'noopen',
    'X-Permitted-Cross-Domain-Policies': 'none',
    'Cross-Origin-Opener-Policy': 'same-origin',
    'Cross-Origin-Resource-Policy': 'same-origin',
    'Origin-Agent-Cluster': '?1',
    'X-XSS-Protection': '0',
}


def limit_http_requests():
    limiter = current_app.extensions['relay']['http_limiter']
    addr = client_address(request, current_app.config.get('HTTP_TRUST_X_FORWARDED_FOR', False))
    if limiter.is_allowed(addr):
        return None
    current_app.logger.warning(f"[http-rate-limit] addr={addr} path={request.path}")
    response = jsonify({'error': HTTP_RATE_LIMIT_MESSAGE})
    response.status_code = 429
    response.headers['Retry-After'] = str(math.ceil(limiter.retry_after(addr)))
    return response


def add_security_headers(response):
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


def init_security(flask_app) -> None:
    flask_app.before_request(limit_http_requests)
    flask_app.after_request(add_security_headers)
