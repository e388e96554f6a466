"""
Poker Arena Sync - Socket.IO Transport

Owns the single Socket.IO connection to the arena server. Runs the async
client on an asyncio event loop in a daemon thread, turns each inbound
message into exactly one dispatched event, and schedules the timed
follow-up events (result clear, settlement flash clear) on the same loop.

The transport never touches state directly; it only calls ``dispatch``.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Callable, Coroutine

import socketio
from socketio.exceptions import SocketIOError
from socketio.exceptions import TimeoutError as SocketIOTimeout

from src.arena.events import ArenaEvent, EventPayload, connectivity_changed
from src.arena.models import LeaderboardEntry, WalletAuthResponse
from src.arena.state import SessionState
from src.config.settings import Settings, get_settings
from src.realtime.commands import Command, DisconnectWallet, RequestLeaderboard, WalletAuth
from src.realtime.events import (
    ScheduledEvent,
    decode_body,
    decode_message,
    scheduled_follow_ups,
)

logger = logging.getLogger(__name__)

# The store's dispatch returns the resulting snapshot; plain callbacks may return None
Dispatch = Callable[[EventPayload], SessionState | None]


class WalletAuthError(Exception):
    """The server rejected (or never answered) a wallet auth request."""


class ArenaTransport:
    """Socket.IO client bridged onto a background event loop.

    All inbound handlers and timers run on the loop thread, so dispatches
    from the server side are serialized. Outbound calls may come from any
    thread.
    """

    def __init__(
        self,
        dispatch: Dispatch,
        settings: Settings | None = None,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        self._dispatch = dispatch
        self._settings = settings or get_settings()
        self._client = client or socketio.AsyncClient(
            reconnection=True,
            reconnection_delay=self._settings.reconnection_delay,
        )
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._register_handlers()

    # -- Event loop ------------------------------------------------------

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        """Start the background event loop if not running."""
        with self._lock:
            if self._thread is None or not self._thread.is_alive():
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._run_loop, daemon=True, name="arena-transport"
                )
                self._thread.start()
            return self._loop

    def _run_loop(self) -> None:
        """Run the asyncio event loop in the background thread."""
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def _submit(
        self, coro: Coroutine[Any, Any, Any], log_failure: bool = True
    ) -> concurrent.futures.Future:
        """Run a coroutine on the loop.

        With ``log_failure`` the error of an unobserved future is logged.
        Callers that wait on the result pass False and handle it themselves.
        """
        loop = self._ensure_loop()
        future = asyncio.run_coroutine_threadsafe(coro, loop)
        if log_failure:
            future.add_done_callback(self._log_failure)
        return future

    def _call(self, command: Command, timeout: float) -> Any:
        """Emit ``command`` and block until the server acknowledges it.

        Raises:
            socketio.exceptions.TimeoutError: No ack within ``timeout``.
            socketio.exceptions.SocketIOError: Not connected.
        """
        future = self._submit(
            self._client.call(command.channel, command.to_wire(), timeout=timeout),
            log_failure=False,
        )
        try:
            return future.result(timeout=timeout + 1)
        except concurrent.futures.TimeoutError as exc:
            future.cancel()
            raise SocketIOTimeout() from exc

    @staticmethod
    def _log_failure(future: concurrent.futures.Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Transport operation failed: %s", exc, exc_info=exc)

    # -- Connection lifecycle --------------------------------------------

    def connect(self) -> concurrent.futures.Future:
        """Start connecting in the background.

        Returns immediately; the store sees ``connected=True`` once the
        connect event arrives. Failed attempts keep retrying with the
        configured backoff.
        """
        settings = self._settings
        logger.info("Connecting to arena at %s", settings.arena_url)
        return self._submit(
            self._client.connect(
                settings.arena_url,
                transports=settings.transports,
                socketio_path=settings.socketio_path,
                wait_timeout=settings.connect_timeout,
                retry=True,
            )
        )

    @property
    def connected(self) -> bool:
        return bool(self._client.connected)

    def shutdown(self) -> None:
        """Disconnect, stop the background event loop and clean up."""
        loop = self._loop
        if loop is not None and self._thread is not None and self._thread.is_alive():
            future = asyncio.run_coroutine_threadsafe(self._client.disconnect(), loop)
            try:
                future.result(timeout=5)
            except Exception:
                logger.exception("Error disconnecting from arena")
            loop.call_soon_threadsafe(loop.stop)
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._loop = None
        self._thread = None

    # -- Inbound ---------------------------------------------------------

    def _register_handlers(self) -> None:
        self._client.on("connect", self._on_connect)
        self._client.on("disconnect", self._on_disconnect)
        self._client.on("connect_error", self._on_connect_error)
        self._client.on("*", self._handle_message)

    def _on_connect(self) -> None:
        logger.info("Connected to arena")
        self._dispatch_safely(connectivity_changed(True))

    def _on_disconnect(self, reason: Any = None) -> None:
        logger.warning("Disconnected from arena (%s)", reason or "unknown reason")
        self._dispatch_safely(connectivity_changed(False))

    def _on_connect_error(self, data: Any = None) -> None:
        logger.error("Arena connection error: %s", data)

    def _handle_message(self, channel: str, body: Any = None) -> None:
        """Decode one inbound message, dispatch it, schedule follow-ups.

        Unknown channels and malformed bodies are logged and dropped;
        nothing raised here may reach the socket client.
        """
        try:
            payload = decode_message(channel, body)
        except ValueError:
            logger.warning("Dropping malformed %s payload", channel, exc_info=True)
            return
        if payload is None:
            logger.debug("Ignoring message on unknown channel %s", channel)
            return

        try:
            state = self._dispatch(payload)
            for follow_up in scheduled_follow_ups(payload, self._settings, state):
                self._schedule(follow_up)
        except Exception:
            logger.exception("Error handling message on %s", channel)

    def _schedule(self, follow_up: ScheduledEvent) -> None:
        """Dispatch an event after a delay, on the loop thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning(
                "No event loop, dropping scheduled %s", follow_up.payload.event.name
            )
            return
        loop.call_soon_threadsafe(
            loop.call_later, follow_up.delay, self._dispatch_safely, follow_up.payload
        )

    def _dispatch_safely(self, payload: EventPayload) -> None:
        try:
            self._dispatch(payload)
        except Exception:
            logger.exception("Error dispatching %s", payload.event.name)

    # -- Outbound --------------------------------------------------------

    def send(self, command: Command) -> None:
        """Emit a command without waiting for acknowledgment."""
        logger.debug("Sending %s", command.channel)
        self._submit(self._client.emit(command.channel, command.to_wire()))

    def request_wallet_auth(
        self, address: str, signature: str, message: str
    ) -> WalletAuthResponse:
        """Ask the server to verify a signed message and bind the wallet.

        Blocks the calling thread until the server acknowledges; must not
        be called from the transport's own loop thread.

        Raises:
            WalletAuthError: On rejection, timeout or a malformed reply.
        """
        command = WalletAuth(address=address, signature=signature, message=message)
        try:
            raw = self._call(command, self._settings.auth_timeout)
        except SocketIOTimeout as exc:
            raise WalletAuthError("Auth timeout") from exc
        except SocketIOError as exc:
            raise WalletAuthError(str(exc) or "Socket not connected") from exc

        try:
            response = WalletAuthResponse.model_validate(raw)
        except ValueError as exc:
            raise WalletAuthError("Malformed auth response") from exc
        if not response.success:
            raise WalletAuthError(response.error or "Auth failed")

        self._dispatch(EventPayload(ArenaEvent.WALLET_AUTH_SUCCEEDED, data=address))
        return response

    def disconnect_wallet(self) -> None:
        """Unbind the wallet on the server and forget it locally."""
        self.send(DisconnectWallet())
        self._dispatch(EventPayload(ArenaEvent.WALLET_DISCONNECTED))

    def request_leaderboard(
        self, sort_by: str = "winRate"
    ) -> tuple[LeaderboardEntry, ...] | None:
        """Fetch the leaderboard and replace the stored one.

        The server answers through the acknowledgment only. Blocks like
        ``request_wallet_auth``. A timeout, a lost connection or a malformed
        reply is logged and leaves the stored leaderboard untouched.

        Returns:
            The new entries, or None when the request failed
        """
        command = RequestLeaderboard(sort_by=sort_by)
        try:
            raw = self._call(command, self._settings.request_timeout)
            entries = decode_body(ArenaEvent.LEADERBOARD_REPLACED, raw)
        except SocketIOError as exc:
            logger.warning("Leaderboard request failed: %s", str(exc) or "timeout")
            return None
        except ValueError:
            logger.warning("Dropping malformed leaderboard reply", exc_info=True)
            return None

        self._dispatch(EventPayload(ArenaEvent.LEADERBOARD_REPLACED, data=entries))
        return entries
