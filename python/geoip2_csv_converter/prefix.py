"""Network prefix model used to derive the alternative network representations."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import Enum, unique

from .utils import format_ip


class PrefixParseError(ValueError):
    """Raised when a value is not a valid CIDR network prefix."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"invalid network prefix {text!r}: {reason}")
        self.text = text
        self.reason = reason


@unique
class AddressFamily(Enum):
    IPV4 = (4, 32)
    IPV6 = (16, 128)

    def __init__(self, byte_width: int, bit_width: int) -> None:
        self.byte_width = byte_width
        self.bit_width = bit_width


@dataclass(frozen=True)
class Prefix:
    """An address plus a prefix length.

    The address is kept exactly as parsed; host bits are not masked off.
    """

    family: AddressFamily
    address: bytes
    prefix_length: int

    def __post_init__(self) -> None:
        if len(self.address) != self.family.byte_width:
            raise ValueError(
                f"{self.family.name} address must be {self.family.byte_width} bytes, "
                f"got {len(self.address)}"
            )
        if not 0 <= self.prefix_length <= self.family.bit_width:
            raise ValueError(
                f"{self.family.name} prefix length must be between 0 and "
                f"{self.family.bit_width}, got {self.prefix_length}"
            )
        object.__setattr__(self, "address", bytes(self.address))

    def first_address(self) -> bytes:
        return self.address

    def last_address(self) -> bytes:
        width = self.family.bit_width
        host_mask = (1 << (width - self.prefix_length)) - 1
        value = int.from_bytes(self.address, "big") | host_mask
        return value.to_bytes(self.family.byte_width, "big")

    def to_cidr_text(self) -> str:
        return f"{format_ip(self.address)}/{self.prefix_length}"

    def __str__(self) -> str:
        return self.to_cidr_text()


def parse_prefix(text: str) -> Prefix:
    """Parse ``address/prefix_length`` notation for IPv4 or IPv6."""

    address_text, sep, length_text = text.partition("/")
    if not sep:
        raise PrefixParseError(text, "no '/'")
    if "%" in address_text:
        raise PrefixParseError(text, "IPv6 zones cannot be present in a prefix")
    if not length_text.isdigit() or not length_text.isascii():
        raise PrefixParseError(text, "bad bits after slash")
    if len(length_text) > 1 and length_text.startswith("0"):
        raise PrefixParseError(text, "bad bits after slash")

    family = AddressFamily.IPV6 if ":" in address_text else AddressFamily.IPV4
    try:
        if family is AddressFamily.IPV6:
            address = ipaddress.IPv6Address(address_text)
        else:
            address = ipaddress.IPv4Address(address_text)
    except ValueError as exc:
        raise PrefixParseError(text, str(exc)) from exc

    prefix_length = int(length_text)
    if prefix_length > family.bit_width:
        raise PrefixParseError(
            text, f"prefix length out of range for {family.name} ({prefix_length})"
        )

    return Prefix(family, address.packed, prefix_length)


def first_address(prefix: Prefix) -> bytes:
    return prefix.first_address()


def last_address(prefix: Prefix) -> bytes:
    """Base address with every host bit set, in the family's byte width."""
    return prefix.last_address()


def to_text(address: bytes) -> str:
    return format_ip(address)


def to_decimal(address: bytes) -> str:
    """Unsigned big-endian integer value of the address in base 10."""
    return str(int.from_bytes(address, "big"))


def to_hex(address: bytes) -> str:
    """Unsigned big-endian integer value in lowercase base 16, without ``0x``."""
    return format(int.from_bytes(address, "big"), "x")


def to_cidr_text(prefix: Prefix) -> str:
    return prefix.to_cidr_text()


__all__ = [
    "AddressFamily",
    "Prefix",
    "PrefixParseError",
    "parse_prefix",
    "first_address",
    "last_address",
    "to_text",
    "to_decimal",
    "to_hex",
    "to_cidr_text",
]
