"""
Consistency capability
======================
Decides whether two usages of the same term mean different things.

The engine only knows the single-method interface below. Two implementations
ship here:

  NullConsistencyChecker       never flags anything (capability unavailable)
  AnthropicConsistencyChecker  asks an LLM over HTTP, guarded by a circuit breaker

Callers treat any ConsistencyCheckError (or transport error) as "consistent".
"""

from __future__ import annotations

import json
import logging
import re
import threading
import time
from typing import Any, Callable, Dict, Optional

import requests

log = logging.getLogger("semantic-consistency")

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_TIMEOUT = 15.0
CONTEXT_CHARS = 200

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class ConsistencyCheckError(RuntimeError):
    """The capability could not produce a verdict."""


class ConsistencyChecker:
    """Interface: True means the two usages are inconsistent."""
    name = "base"

    def check_consistency(self, term: str, context_a: str, context_b: str) -> bool:
        raise NotImplementedError


class NullConsistencyChecker(ConsistencyChecker):
    name = "null"

    def check_consistency(self, term: str, context_a: str, context_b: str) -> bool:
        return False


# ══════════════ CIRCUIT BREAKER ══════════════
class CircuitBreaker:
    def __init__(self, name: str, threshold: int = 3, timeout: float = 60,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.name, self.threshold, self.timeout = name, threshold, timeout
        self.failures, self.state, self.last_fail = 0, "closed", 0.0
        self._clock = clock
        self._lock = threading.Lock()

    def call(self, func, *a, **kw):
        # state transitions are locked; the wrapped call itself is not
        with self._lock:
            if self.state == "open":
                if self._clock() - self.last_fail > self.timeout:
                    self.state = "half-open"
                else:
                    raise ConsistencyCheckError(f"Circuit '{self.name}' OPEN")
        try:
            r = func(*a, **kw)
        except Exception:
            with self._lock:
                self.failures += 1
                self.last_fail = self._clock()
                if self.failures >= self.threshold or self.state == "half-open":
                    self.state = "open"
            raise
        with self._lock:
            self.state, self.failures = "closed", 0
        return r


def build_prompt(term: str, context_a: str, context_b: str) -> str:
    return (
        f'Compare how the term "{term}" is used in these two contexts:\n\n'
        f'Context A:\n"{context_a[:CONTEXT_CHARS]}"\n\n'
        f'Context B:\n"{context_b[:CONTEXT_CHARS]}"\n\n'
        "Does the term mean the same thing in both contexts?\n"
        'Respond with JSON only: {"inconsistent": true/false, "details": "brief explanation if inconsistent"}'
    )


def parse_verdict(text: str) -> Dict[str, Any]:
    m = _JSON_OBJECT.search(text or "")
    if not m:
        raise ConsistencyCheckError("No JSON object in model reply")
    try:
        verdict = json.loads(m.group(0))
    except ValueError as e:
        raise ConsistencyCheckError(f"Unparseable model reply: {e}") from e
    if not isinstance(verdict, dict) or not isinstance(verdict.get("inconsistent"), bool):
        raise ConsistencyCheckError("Model reply lacks a boolean 'inconsistent'")
    return verdict


class AnthropicConsistencyChecker(ConsistencyChecker):
    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        breaker: Optional[CircuitBreaker] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()
        self.breaker = breaker or CircuitBreaker("anthropic", 3, 60)

    def _request(self, prompt: str) -> str:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        body = {
            "model": self.model,
            "max_tokens": 200,
            "messages": [{"role": "user", "content": prompt}],
        }
        t0 = time.time()
        try:
            resp = self.session.post(ANTHROPIC_URL, headers=headers, json=body, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise ConsistencyCheckError(f"Consistency request failed: {e}") from e
        log.debug(f"consistency call took {int((time.time() - t0) * 1000)}ms")

        if "content" not in data:
            raise ConsistencyCheckError(data.get("error", {}).get("message", "Unknown error"))
        return "".join(b.get("text", "") for b in data["content"] if b.get("type") == "text")

    def check_consistency(self, term: str, context_a: str, context_b: str) -> bool:
        reply = self.breaker.call(self._request, build_prompt(term, context_a, context_b))
        verdict = parse_verdict(reply)
        if verdict["inconsistent"]:
            log.info(f"'{term}' used inconsistently: {verdict.get('details', '')}")
        return verdict["inconsistent"]


def build_consistency_checker(settings: Dict[str, Any]) -> ConsistencyChecker:
    """Anthropic checker when a key is configured, otherwise the null checker."""
    api_key = settings.get("ANTHROPIC_API_KEY") or ""
    if not api_key:
        return NullConsistencyChecker()
    return AnthropicConsistencyChecker(
        api_key=api_key,
        model=settings.get("CONSISTENCY_MODEL") or DEFAULT_MODEL,
        timeout=float(settings.get("CONSISTENCY_TIMEOUT") or DEFAULT_TIMEOUT),
    )


_shared_checkers: Dict[tuple, ConsistencyChecker] = {}
_shared_lock = threading.Lock()


def shared_consistency_checker(settings: Dict[str, Any]) -> ConsistencyChecker:
    """
    One checker per configuration for the whole process, so the HTTP session
    is reused and the circuit breaker remembers failures across requests.
    """
    key = (
        settings.get("ANTHROPIC_API_KEY") or "",
        settings.get("CONSISTENCY_MODEL") or DEFAULT_MODEL,
        float(settings.get("CONSISTENCY_TIMEOUT") or DEFAULT_TIMEOUT),
    )
    with _shared_lock:
        checker = _shared_checkers.get(key)
        if checker is None:
            checker = _shared_checkers[key] = build_consistency_checker(settings)
    return checker
