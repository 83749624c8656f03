class FakeResponse:
    def __init__(self, body=b"", status_code=200):
        self.content = body
        self.status_code = status_code


class FakeSession:
    """Stands in for requests; replays a queue of responses or exceptions."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
