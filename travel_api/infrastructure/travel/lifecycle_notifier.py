"""
Adapter: Queued lifecycle event notifier.

Implements LifecycleEventNotifier port. Use cases hand events over with
``notify()``, which only enqueues; a background worker thread drains the
queue and delivers each event through the registered channels:

    use case ──notify()──▶ queue ──worker──▶ ┌ webhooks (HTTP POST)
                                             └ callbacks (in-process)

Delivery failures are logged and counted; they never reach the caller.

Usage:
    notifier = QueuedLifecycleNotifier(webhook_urls=["https://hooks.example.com/travel"])
    notifier.start()
    ...
    notifier.stop()
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlparse

import httpx

from travel_api.domain.travel.entities import LifecycleEvent
from travel_api.domain.travel.notifications import event_to_dict
from travel_api.domain.travel.ports import LifecycleEventNotifier

logger = logging.getLogger(__name__)

DeliveryCallback = Callable[[LifecycleEvent], None]

_STOP = object()


@dataclass
class DeliveryResult:
    """Result of delivering one event through one channel."""

    channel: str
    success: bool
    error: str | None = None
    latency_ms: float = 0.0


class QueuedLifecycleNotifier(LifecycleEventNotifier):
    """Fire-and-forget notifier backed by a bounded in-process queue.

    Args:
        webhook_urls: Initial list of webhook URLs to POST events to.
        max_queue_size: Events beyond this backlog are dropped and counted.
        webhook_timeout: HTTP timeout in seconds for webhook calls.
        http_client: Optional shared httpx client (mainly for tests).
    """

    def __init__(
        self,
        webhook_urls: list[str] | None = None,
        max_queue_size: int = 1000,
        webhook_timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._queue: queue.Queue = queue.Queue(maxsize=max_queue_size)
        self._webhook_urls: list[str] = []
        self._callbacks: list[DeliveryCallback] = []
        self._webhook_timeout = webhook_timeout
        self._http_client = http_client
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._stats = {
            "enqueued": 0,
            "dropped": 0,
            "delivered": 0,
            "webhook_calls": 0,
            "callback_invocations": 0,
            "errors": 0,
        }
        for url in webhook_urls or []:
            self.add_webhook(url)

    @property
    def stats(self) -> dict:
        with self._lock:
            return dict(self._stats)

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def _bump(self, key: str) -> None:
        with self._lock:
            self._stats[key] += 1

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_webhook(self, url: str) -> None:
        """Register a webhook URL for event delivery.

        Args:
            url: Full URL (must be http/https).

        Raises:
            ValueError: If the URL is invalid.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            msg = f"Invalid webhook URL scheme: {parsed.scheme}"
            raise ValueError(msg)
        if url not in self._webhook_urls:
            self._webhook_urls.append(url)
            logger.info("Webhook registered: %s", url)

    def remove_webhook(self, url: str) -> None:
        """Unregister a webhook URL."""
        if url in self._webhook_urls:
            self._webhook_urls.remove(url)
            logger.info("Webhook removed: %s", url)

    def add_callback(self, callback: DeliveryCallback) -> None:
        """Register an in-process callback invoked for every event."""
        self._callbacks.append(callback)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the background delivery worker."""
        if self.is_running:
            logger.warning("Lifecycle notifier already running.")
            return

        self._worker = threading.Thread(
            target=self._run, name="lifecycle-notifier", daemon=True
        )
        self._worker.start()
        logger.info("Lifecycle notifier started.")

    def stop(self, timeout: float = 5.0) -> None:
        """Deliver what is already queued, then stop the worker."""
        if self._worker is None:
            return

        self._queue.put(_STOP)
        self._worker.join(timeout=timeout)
        if self._worker.is_alive():
            logger.warning("Lifecycle notifier did not stop within %.1fs", timeout)
        self._worker = None
        logger.info("Lifecycle notifier stopped.")

    # ------------------------------------------------------------------
    # Port implementation
    # ------------------------------------------------------------------

    def notify(self, event: LifecycleEvent) -> None:
        """Enqueue an event without waiting for delivery."""
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            self._bump("dropped")
            logger.error(
                "Notification queue full; dropped %s event for order %d",
                event.kind.value,
                event.order.id,
            )
            return
        self._bump("enqueued")

    def drain(self) -> int:
        """Deliver every queued event in the calling thread.

        Intended for when the worker is not running (scripts, tests).

        Returns:
            Number of events delivered.
        """
        delivered = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return delivered
            try:
                if item is not _STOP:
                    self.deliver(item)
                    delivered += 1
            finally:
                self._queue.task_done()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self.deliver(item)
            finally:
                self._queue.task_done()

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def deliver(self, event: LifecycleEvent) -> list[DeliveryResult]:
        """Deliver one event through every registered channel.

        Args:
            event: The lifecycle event to deliver.

        Returns:
            One DeliveryResult per channel.
        """
        payload = event_to_dict(event)
        results = [self._send_webhook(url, payload) for url in list(self._webhook_urls)]
        results.extend(self._send_callback(cb, event) for cb in list(self._callbacks))

        if not results:
            logger.info(
                "No notification channel configured; %s for order %d not delivered",
                payload["event"],
                event.order.id,
            )

        self._bump("delivered")
        return results

    def _send_webhook(self, url: str, payload: dict) -> DeliveryResult:
        """POST an event payload to a webhook URL."""
        start = time.monotonic()
        headers = {"X-Travel-Event": payload["event"]}

        try:
            if self._http_client is not None:
                resp = self._http_client.post(url, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=self._webhook_timeout) as client:
                    resp = client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            self._bump("errors")
            logger.error("Webhook POST to %s failed: %s", url, exc)
            return DeliveryResult(
                channel=f"webhook:{url}",
                success=False,
                error=str(exc),
                latency_ms=round((time.monotonic() - start) * 1000, 2),
            )

        self._bump("webhook_calls")
        return DeliveryResult(
            channel=f"webhook:{url}",
            success=True,
            latency_ms=round((time.monotonic() - start) * 1000, 2),
        )

    def _send_callback(
        self, callback: DeliveryCallback, event: LifecycleEvent
    ) -> DeliveryResult:
        """Invoke an in-process callback with the event."""
        start = time.monotonic()
        name = getattr(callback, "__name__", type(callback).__name__)

        try:
            callback(event)
        except Exception as exc:
            self._bump("errors")
            logger.exception("Callback %s failed", name)
            return DeliveryResult(
                channel=f"callback:{name}",
                success=False,
                error=str(exc),
                latency_ms=round((time.monotonic() - start) * 1000, 2),
            )

        self._bump("callback_invocations")
        return DeliveryResult(
            channel=f"callback:{name}",
            success=True,
            latency_ms=round((time.monotonic() - start) * 1000, 2),
        )
