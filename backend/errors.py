"""Error types raised while loading and parsing a routing table snapshot."""

from __future__ import annotations

from typing import Optional


class RoutingTableError(Exception):
    """Base for all routing table errors."""


# --- Route entry (single line) errors ---

class RouteEntryParseError(RoutingTableError):
    """A data row could not be turned into a RouteEntry."""


class DestinationParseError(RouteEntryParseError):
    """Malformed address or network literal."""

    def __init__(self, token: str, cause: Optional[Exception] = None):
        self.token = token
        self.cause = cause
        super().__init__(f"parsing destination CIDR {token!r}: {cause}")


class MacAddressParseError(RouteEntryParseError):
    def __init__(self, token: str, cause: str):
        self.token = token
        self.cause = cause
        super().__init__(f"parsing MAC addr {token!r}: {cause}")


class IPv4ComponentError(RouteEntryParseError):
    """A component of a shorthand IPv4 address is not a byte."""

    def __init__(self, token: str, cause: str):
        self.token = token
        self.cause = cause
        super().__init__(f"unparseable byte in IPv4 address {token!r}: {cause}")


class IPv4ComponentCountError(RouteEntryParseError):
    def __init__(self, count: int, token: str):
        self.count = count
        self.token = token
        super().__init__(f"invalid number of IPv4 address components ({count}) in {token!r}")


class ExpirationParseError(RouteEntryParseError):
    def __init__(self, token: str, cause: str):
        self.token = token
        self.cause = cause
        super().__init__(f"invalid expiration {token!r}: {cause}")


class MissingDestinationError(RouteEntryParseError):
    def __init__(self):
        super().__init__("missing destination")


class MissingGatewayError(RouteEntryParseError):
    def __init__(self):
        super().__init__("missing gateway")


class MissingInterfaceError(RouteEntryParseError):
    def __init__(self):
        super().__init__("missing network interface")


# --- Snapshot (whole table) errors ---

class MissingHeadersError(RoutingTableError):
    def __init__(self, section: str):
        self.section = section
        super().__init__(f"no headers follow {section!r} section marker")


class EntryBeforeProtocolError(RoutingTableError):
    def __init__(self, line: str = ""):
        self.line = line
        super().__init__("route entry found before protocol (Internet/Internet6) found")


class RouteLineError(RoutingTableError):
    """Wraps the RouteEntryParseError raised for one line of the snapshot."""

    def __init__(self, line_number: int, line: str, error: RouteEntryParseError):
        self.line_number = line_number
        self.line = line
        self.error = error
        super().__init__(f"parsing route entry on line {line_number}: {error}")


# --- Collector errors ---

class CollectorError(RoutingTableError):
    """The snapshot text could not be obtained."""


class NetstatExecError(CollectorError):
    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to execute {path}: {cause}")


class NetstatFailedError(CollectorError):
    def __init__(self, returncode: int, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        msg = f"failed to get routing table: exit status {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg)


class NetstatTimeoutError(CollectorError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"netstat did not finish within {timeout}s")


class NetstatDecodeError(CollectorError):
    def __init__(self, cause: UnicodeDecodeError):
        self.cause = cause
        super().__init__(f"netstat output is not UTF-8: {cause}")


class SnapshotFileError(CollectorError):
    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to read snapshot {path}: {cause}")


class SnapshotDecodeError(CollectorError):
    def __init__(self, path: str, cause: UnicodeDecodeError):
        self.path = path
        self.cause = cause
        super().__init__(f"snapshot {path} is not UTF-8: {cause}")
