import contextlib
import time

from chainlotto import my_logging
from chainlotto.config import cl_print


@contextlib.contextmanager
def time_measure(key, should_print=False, skip=False):
    start = time.time()
    yield
    end = time.time()
    elapsed = end - start

    if not skip:
        if should_print:
            cl_print(f"Took {elapsed} s")
        my_logging.data("time_" + key, elapsed)
