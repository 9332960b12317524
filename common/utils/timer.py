import logging
import time


class BlockTimer:
    def __init__(self, label="block", logger=None):
        self.label = label
        self._logger = logger or logging.getLogger(__name__)
        self.total_time = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.total_time = self.end_time - self.start_time
        self._logger.debug("%s took %.4f seconds", self.label, self.total_time)

        # returning a truthy value here would swallow the exception
        return None
