# cluster_imputer/parallel.py
from concurrent.futures import ThreadPoolExecutor

from .config import CFG


def chunk_bounds(n, n_chunks):
    """Split range(n) into at most n_chunks contiguous (start, stop) pairs."""
    n_chunks = max(1, min(n_chunks, n))
    step, extra = divmod(n, n_chunks)
    bounds = []
    start = 0
    for i in range(n_chunks):
        stop = start + step + (1 if i < extra else 0)
        if stop > start:
            bounds.append((start, stop))
        start = stop
    return bounds


def parallel_chunks(n, fn, n_jobs=None):
    """Run fn(start, stop) over contiguous chunks of range(n).

    Results come back in chunk order. A failing chunk re-raises from
    Future.result() so the whole call fails.
    """
    if n_jobs is None:
        n_jobs = CFG["n_jobs"]
    bounds = chunk_bounds(n, n_jobs)
    if n_jobs <= 1 or len(bounds) <= 1:
        return [fn(start, stop) for start, stop in bounds]
    with ThreadPoolExecutor(max_workers=len(bounds)) as executor:
        futures = [executor.submit(fn, start, stop) for start, stop in bounds]
        return [future.result() for future in futures]
