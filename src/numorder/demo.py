from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import style
from .config import DemoConfig
from .fetch import HttpClient
from .log import get_logger
from .ordering import NumberSequence, ascending_sort, is_descending, reverse_in_place


@dataclass
class DemoResult:
    status: Optional[str] = None
    error: Optional[str] = None
    posts: int = 0
    count: int = 0
    sort_ms: float = 0.0
    reverse_ms: float = 0.0
    descending: bool = False


def _show_styles(log: logging.Logger) -> None:
    for name in style.STYLES:
        label = "underlined" if name == "underline" else "reversed" if name == "reverse" else name
        log.info(style.style(name, f"This is {label}!"))


def _fetch_posts(cfg: DemoConfig, client: HttpClient, log: logging.Logger, result: DemoResult):
    log.info("HTTP library")
    resp = client.get(cfg.url)
    if "error" in resp:
        result.error = resp["error"]
        log.error("Request to %s failed: %s", cfg.url, resp["error"])
        return None
    result.status = resp["status"]
    log.info("Got %s!", resp["status"])

    try:
        posts = json.loads(resp["text"])
    except json.JSONDecodeError as e:
        result.error = f"invalid JSON: {e}"
        log.error("Could not decode response from %s: %s", cfg.url, e)
        return None
    if not isinstance(posts, list):
        posts = [posts]
    result.posts = len(posts)
    log.info("Got %d posts!", len(posts))
    return posts


def _show_posts(posts, limit: Optional[int], log: logging.Logger) -> None:
    shown = posts if limit is None else posts[:limit]
    for post in shown:
        if not isinstance(post, dict):
            continue
        log.info(style.red(post.get("title", "")))
        log.info(style.blue(post.get("body", "")))
        log.info(style.green(post.get("id", "")))


def run_demo(
    cfg: DemoConfig,
    rng: np.random.Generator,
    client: Optional[HttpClient] = None,
    log: Optional[logging.Logger] = None,
) -> DemoResult:
    """Run the fixed sequence of demonstration steps and report what happened."""
    log = log or get_logger("demo")
    result = DemoResult()
    log.info("Running demo...")

    posts = None
    if not cfg.skip_http:
        if client is None:
            with HttpClient(headers=cfg.headers, timeout=cfg.timeout) as owned:
                posts = _fetch_posts(cfg, owned, log, result)
        else:
            posts = _fetch_posts(cfg, client, log, result)

    log.info("Color library")
    _show_styles(log)

    if posts:
        _show_posts(posts, cfg.max_posts, log)

    log.info(style.green(f"Generating a random list of {cfg.count:,} numbers..."))
    numbers = NumberSequence.random(cfg.count, rng)
    result.count = len(numbers)

    log.info("Sorting...")
    start = time.perf_counter()
    ascending_sort(numbers)
    result.sort_ms = round((time.perf_counter() - start) * 1000.0, 3)

    log.info("Reversing...")
    start = time.perf_counter()
    reverse_in_place(numbers)
    result.reverse_ms = round((time.perf_counter() - start) * 1000.0, 3)

    result.descending = is_descending(numbers)
    log.info("Sorted in %.3f ms, reversed in %.3f ms", result.sort_ms, result.reverse_ms)
    if not result.descending:
        log.error("Sequence is not in descending order after sort and reverse")
    log.info("Done!")
    return result
