from concurrent.futures import Executor, Future


class ImmediateExecutor(Executor):
    """Runs submitted work inline so fetch results are ready on return."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


class FakeTransport:
    """Records requested URLs and returns a canned body or raises."""

    def __init__(self, body="", error=None):
        self.body = body
        self.error = error
        self.urls = []

    def __call__(self, url, timeout=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.body
