"""ICMP echo transport.

The sampler only needs "send one echo, wait for the reply within a timeout,
report the elapsed time or a typed failure".  :class:`Prober` is that
interface; :class:`IcmpProber` implements it on top of icmplib with either
raw (privileged) or datagram (unprivileged) sockets.
"""

from __future__ import annotations

import abc
import ipaddress
import logging
import os
import time
from typing import Union

from icmplib import (
    ICMPLibError,
    ICMPRequest,
    ICMPSocketError,
    ICMPv4Socket,
    ICMPv6Socket,
    SocketPermissionError,
    TimeoutExceeded,
)

from check_jitter.config import ICMP_PAYLOAD_SIZE
from check_jitter.errors import PermissionDenied, PingError, PingIoError, PingTimeout
from check_jitter.models import SocketType

logger = logging.getLogger(__name__)

IcmpSocket = Union[ICMPv4Socket, ICMPv6Socket]


class Prober(abc.ABC):
    """Sends one ICMP echo at a time."""

    @abc.abstractmethod
    def ping(self, address: str, timeout: float) -> int:
        """Send one echo request to *address* and wait for its reply.

        Returns the round-trip time in nanoseconds.  Raises a
        :class:`~check_jitter.errors.CheckJitterError` subclass on failure.
        """

    def close(self) -> None:
        """Release transport resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class IcmpProber(Prober):
    """icmplib-backed prober, one socket per address family, opened lazily."""

    def __init__(self, socket_type: SocketType = SocketType.RAW):
        self.socket_type = socket_type
        self.identifier = os.getpid() & 0xFFFF
        self.sequence = 0
        self._sockets: dict[int, IcmpSocket] = {}

    def _socket_for(self, address: str) -> IcmpSocket:
        version = ipaddress.ip_address(address).version
        sock = self._sockets.get(version)
        if sock is None:
            socket_cls = ICMPv6Socket if version == 6 else ICMPv4Socket
            logger.debug(
                "Opening %s ICMPv%d socket", str(self.socket_type).lower(), version,
            )
            sock = socket_cls(privileged=self.socket_type.privileged)
            self._sockets[version] = sock
        return sock

    def ping(self, address: str, timeout: float) -> int:
        timeout_ms = int(round(timeout * 1000))
        try:
            sock = self._socket_for(address)
            self.sequence = (self.sequence + 1) & 0xFFFF
            request = ICMPRequest(
                destination=address,
                id=self.identifier,
                sequence=self.sequence,
                payload_size=ICMP_PAYLOAD_SIZE,
            )

            start = time.perf_counter_ns()
            sock.send(request)
            reply = sock.receive(request, timeout)
            elapsed = time.perf_counter_ns() - start

            reply.raise_for_status()
        except (SocketPermissionError, PermissionError):
            raise PermissionDenied() from None
        except (TimeoutExceeded, BlockingIOError):
            raise PingTimeout(timeout_ms) from None
        except ICMPSocketError as exc:
            raise PingIoError(str(exc)) from exc
        except OSError as exc:
            raise PingIoError(str(exc)) from exc
        except ICMPLibError as exc:
            raise PingError(exc) from exc

        logger.debug("Echo reply from %s seq=%d in %dns", address, self.sequence, elapsed)
        return elapsed

    def close(self) -> None:
        for sock in self._sockets.values():
            sock.close()
        self._sockets.clear()


def create_prober(socket_type: SocketType | None = None) -> Prober:
    """Factory for the default transport."""
    return IcmpProber(socket_type or SocketType.RAW)
