"""Process Metrics — resident and virtual memory of the running server."""

import os

import psutil


def memory_usage() -> dict:
    """Memory of this process in bytes, sampled at call time."""
    info = psutil.Process(os.getpid()).memory_info()
    return {"rss": info.rss, "vms": info.vms}
