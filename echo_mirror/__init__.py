"""
Echo Mirror: HTTP request-mirroring utility for testing webhook senders and API clients.

Every request runs through a fixed chain of stages (failure isolation, security
headers, access logging with request correlation) before reaching the echo
handler, which returns the parsed request body in a fixed JSON envelope.
"""

__version__ = "0.1.0"
