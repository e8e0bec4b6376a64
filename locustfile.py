"""
Load test for the echo server.

Run: locust -f locustfile.py --host http://localhost:3000
Then check that log/access-<today>.log has one JSON line per request.
"""

import random

from locust import HttpUser, between, task

PATHS = ["/webhook", "/api/events", "/hooks/github", "/callback"]


class EchoUser(HttpUser):
    wait_time = between(0.1, 0.5)

    @task(5)
    def echo_json(self):
        # random payload size so access log lines vary in length
        payload = {"event": "load_test", "seq": random.randint(0, 10**6), "blob": "x" * random.randint(0, 4096)}
        self.client.post(random.choice(PATHS), json=payload, name="echo")

    @task(2)
    def echo_text(self):
        self.client.post(random.choice(PATHS), data="not json", name="echo (non-json)")

    @task(1)
    def welcome(self):
        self.client.get("/", name="welcome")
