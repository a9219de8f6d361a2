"""Client for the RTSI real-time data exchange protocol."""

from __future__ import annotations

import ipaddress
import select
import socket
import sys
import time
from collections.abc import Iterable, Iterator
from enum import Enum, IntEnum
from typing import Optional

from . import endian
from .recipe import RtsiRecipe
from .version import VersionInfo

HEADER_SIZE = 3
DEFAULT_PORT = 30004
DEFAULT_PROTOCOL_VERSION = 1


class RtsiSocketError(Exception):
    """The connection to the controller failed or broke."""


class PackageType(IntEnum):
    """Type byte of an RTSI message."""

    REQUEST_PROTOCOL_VERSION = 86
    GET_ELITE_CONTROL_VERSION = 118
    TEXT_MESSAGE = 77
    DATA_PACKAGE = 85
    CONTROL_PACKAGE_SETUP_OUTPUTS = 79
    CONTROL_PACKAGE_SETUP_INPUTS = 73
    CONTROL_PACKAGE_START = 83
    CONTROL_PACKAGE_PAUSE = 80


class ConnectionState(Enum):
    """Progress of a client session."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    STARTED = "started"
    STOPPED = "stopped"


def _join_names(names: Iterable[str]) -> bytes:
    names = list(names)
    if not names:
        raise ValueError("a recipe needs at least one variable")
    return ",".join(names).encode("ascii")


class RtsiClient:
    """A blocking RTSI session with one controller.

    ``timeout`` is the time in seconds allowed for each read of a message part;
    when it runs out the connection is dropped.
    """

    def __init__(self, timeout: float = 0.5) -> None:
        self.timeout = timeout
        self.state = ConnectionState.DISCONNECTED
        self._sock: Optional[socket.socket] = None

    def __enter__(self) -> RtsiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    def connect(self, ip: str, port: int = DEFAULT_PORT) -> None:
        """Open the TCP connection to the controller at ``ip``."""
        self._drop()
        try:
            address = str(ipaddress.ip_address(ip))
        except ValueError as exc:
            raise RtsiSocketError(f"invalid address {ip!r}") from exc

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 0)
            if sys.platform.startswith("linux"):
                quickack = getattr(socket, "TCP_QUICKACK", None)
                if quickack is not None:
                    sock.setsockopt(socket.IPPROTO_TCP, quickack, 1)
                priority = getattr(socket, "SO_PRIORITY", None)
                if priority is not None:
                    sock.setsockopt(socket.SOL_SOCKET, priority, 6)
            sock.connect((address, port))
        except OSError as exc:
            sock.close()
            raise RtsiSocketError(f"connect to {address}:{port} failed: {exc}") from exc
        self._sock = sock
        self.state = ConnectionState.CONNECTED

    def disconnect(self) -> None:
        """Close the connection."""
        self._drop()

    def negotiate_protocol_version(self, version: int = DEFAULT_PROTOCOL_VERSION) -> bool:
        """Ask the controller to use protocol ``version``; return whether it accepted."""
        self._send_all(PackageType.REQUEST_PROTOCOL_VERSION, endian.pack("uint16", version))
        accepted = False
        for package in self._packages(PackageType.REQUEST_PROTOCOL_VERSION):
            accepted = bool(package[HEADER_SIZE])
        return accepted

    def get_controller_version(self) -> VersionInfo:
        """Query the controller software version; zeros if there was no reply."""
        self._send_all(PackageType.GET_ELITE_CONTROL_VERSION)
        version = VersionInfo()
        for package in self._packages(PackageType.GET_ELITE_CONTROL_VERSION):
            numbers, _ = endian.unpack_array("uint32", 4, package, HEADER_SIZE)
            version = VersionInfo(*numbers)
        return version

    def setup_output_recipe(self, names: Iterable[str], frequency: float) -> RtsiRecipe:
        """Subscribe to ``names`` at ``frequency`` Hz and return the recipe."""
        names = list(names)
        payload = endian.pack("double", frequency) + _join_names(names)
        self._send_all(PackageType.CONTROL_PACKAGE_SETUP_OUTPUTS, payload)
        recipe = RtsiRecipe(names)
        for package in self._packages(PackageType.CONTROL_PACKAGE_SETUP_OUTPUTS):
            recipe.parse_type_package(package)
        return recipe

    def setup_input_recipe(self, names: Iterable[str]) -> RtsiRecipe:
        """Register ``names`` as inputs to be written and return the recipe."""
        names = list(names)
        self._send_all(PackageType.CONTROL_PACKAGE_SETUP_INPUTS, _join_names(names))
        recipe = RtsiRecipe(names)
        for package in self._packages(PackageType.CONTROL_PACKAGE_SETUP_INPUTS):
            recipe.parse_type_package(package)
        return recipe

    def start(self) -> bool:
        """Start data synchronisation; return whether the controller agreed."""
        self._send_all(PackageType.CONTROL_PACKAGE_START)
        started = False
        for package in self._packages(PackageType.CONTROL_PACKAGE_START):
            started = bool(package[HEADER_SIZE])
            if started:
                self.state = ConnectionState.STARTED
        return started

    def pause(self) -> bool:
        """Pause data synchronisation; return whether the controller agreed."""
        self._send_all(PackageType.CONTROL_PACKAGE_PAUSE)
        paused = False
        for package in self._packages(PackageType.CONTROL_PACKAGE_PAUSE):
            paused = bool(package[HEADER_SIZE])
            if paused:
                self.state = ConnectionState.STOPPED
        return paused

    def send(self, recipe: RtsiRecipe) -> None:
        """Send the current values of an input recipe."""
        self._send_all(PackageType.DATA_PACKAGE, recipe.pack())

    def receive_data(self, recipe: RtsiRecipe, read_newest: bool = False) -> bool:
        """Read a data message into ``recipe``; return whether one for it arrived.

        With ``read_newest`` every complete message already waiting is read, so
        the recipe ends up holding the most recent values.
        """
        received = False
        for package in self._packages(PackageType.DATA_PACKAGE, read_newest):
            if package[HEADER_SIZE] == recipe.recipe_id:
                recipe.parse_data_package(package)
                received = True
        return received

    def receive_any(self, recipes: Iterable[Optional[RtsiRecipe]], read_newest: bool = False) -> int:
        """Read a data message into whichever recipe it belongs to; return its id or -1."""
        recipes = list(recipes)
        result = -1
        for package in self._packages(PackageType.DATA_PACKAGE, read_newest):
            recipe_id = package[HEADER_SIZE]
            for recipe in recipes:
                if recipe is None:
                    break
                if recipe.recipe_id == recipe_id:
                    recipe.parse_data_package(package)
                    result = recipe_id
                    break
        return result

    def is_connected(self) -> bool:
        return self.state is not ConnectionState.DISCONNECTED

    def is_started(self) -> bool:
        return self.state is ConnectionState.STARTED

    def is_read_available(self) -> bool:
        return self._available() > 0

    def _drop(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            except OSError:
                pass
        self._sock = None
        self.state = ConnectionState.DISCONNECTED

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise RtsiSocketError("not connected")
        return self._sock

    def _available(self) -> int:
        sock = self._sock
        if sock is None:
            return 0
        try:
            readable, _, _ = select.select([sock], [], [], 0)
            if not readable:
                return 0
            return len(sock.recv(65536, socket.MSG_PEEK))
        except (OSError, ValueError):
            return 0

    def _send_all(self, package_type: PackageType, payload: bytes = b"") -> None:
        sock = self._require_socket()
        header = endian.pack("uint16", HEADER_SIZE + len(payload)) + bytes([package_type])
        try:
            sock.settimeout(None)
            sock.sendall(header + payload)
        except OSError as exc:
            raise RtsiSocketError(f"send failed: {exc}") from exc

    def _read_exact(self, size: int) -> Optional[bytes]:
        """Read ``size`` bytes; on timeout drop the connection and return None."""
        sock = self._require_socket()
        deadline = time.monotonic() + self.timeout
        buffer = bytearray()
        while len(buffer) < size:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._drop()
                return None
            try:
                sock.settimeout(remaining)
                chunk = sock.recv(size - len(buffer))
            except socket.timeout:
                self._drop()
                return None
            except OSError as exc:
                raise RtsiSocketError(f"receive failed: {exc}") from exc
            if not chunk:
                raise RtsiSocketError("connection closed by peer")
            buffer += chunk
        return bytes(buffer)

    def _packages(self, target: PackageType, read_newest: bool = False) -> Iterator[bytes]:
        """Yield whole messages of type ``target``, skipping other types."""
        while True:
            header = self._read_exact(HEADER_SIZE)
            if header is None:
                return
            length, _ = endian.unpack("uint16", header, 0)
            body_size = length - HEADER_SIZE
            if body_size <= 0:
                return
            body = self._read_exact(body_size)
            if body is None:
                return
            if header[2] == target:
                yield header + body
                if not read_newest or self._available() < HEADER_SIZE:
                    return