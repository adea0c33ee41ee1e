"""Column groups that replace the leading network column of a block CSV."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Callable, List, Sequence, Tuple

from .prefix import Prefix, to_decimal, to_hex, to_text
from .utils import (
    LAST_HEX_COLUMN,
    LAST_INTEGER_COLUMN,
    LAST_IP_COLUMN,
    NETWORK_COLUMN,
    START_HEX_COLUMN,
    START_INTEGER_COLUMN,
    START_IP_COLUMN,
)

HeaderTransform = Callable[[Sequence[str]], List[str]]
LineTransform = Callable[[Prefix, Sequence[str]], List[str]]


def _cidr_values(prefix: Prefix) -> List[str]:
    return [prefix.to_cidr_text()]


def _range_values(prefix: Prefix) -> List[str]:
    return [to_text(prefix.first_address()), to_text(prefix.last_address())]


def _integer_range_values(prefix: Prefix) -> List[str]:
    return [to_decimal(prefix.first_address()), to_decimal(prefix.last_address())]


def _hex_range_values(prefix: Prefix) -> List[str]:
    return [to_hex(prefix.first_address()), to_hex(prefix.last_address())]


@unique
class Representation(Enum):
    """Output column groups, declared in the order they are emitted."""

    CIDR = ((NETWORK_COLUMN,), _cidr_values)
    RANGE = ((START_IP_COLUMN, LAST_IP_COLUMN), _range_values)
    INTEGER_RANGE = ((START_INTEGER_COLUMN, LAST_INTEGER_COLUMN), _integer_range_values)
    HEX_RANGE = ((START_HEX_COLUMN, LAST_HEX_COLUMN), _hex_range_values)

    def __init__(
        self,
        column_names: Tuple[str, ...],
        generator: Callable[[Prefix], List[str]],
    ) -> None:
        self.column_names = column_names
        self._generator = generator

    def values(self, prefix: Prefix) -> List[str]:
        return self._generator(prefix)


@dataclass(frozen=True)
class RepresentationRequest:
    """Which column groups to add in place of the source network column."""

    cidr: bool = False
    ip_range: bool = False
    integer_range: bool = False
    hex_range: bool = False

    def selected(self) -> List[Representation]:
        flags = {
            Representation.CIDR: self.cidr,
            Representation.RANGE: self.ip_range,
            Representation.INTEGER_RANGE: self.integer_range,
            Representation.HEX_RANGE: self.hex_range,
        }
        return [rep for rep in Representation if flags[rep]]

    def any(self) -> bool:
        return bool(self.selected())


def build_header_transform(request: RepresentationRequest) -> HeaderTransform:
    """Return a function mapping the trailing header columns to the output header."""

    names: List[str] = []
    for rep in request.selected():
        names.extend(rep.column_names)

    def make_header(trailing: Sequence[str]) -> List[str]:
        return names + list(trailing)

    return make_header


def build_line_transform(request: RepresentationRequest) -> LineTransform:
    """Return a function mapping a parsed network and trailing fields to an output row."""

    selected = request.selected()

    def make_line(prefix: Prefix, trailing: Sequence[str]) -> List[str]:
        row: List[str] = []
        for rep in selected:
            row.extend(rep.values(prefix))
        row.extend(trailing)
        return row

    return make_line


__all__ = [
    "HeaderTransform",
    "LineTransform",
    "Representation",
    "RepresentationRequest",
    "build_header_transform",
    "build_line_transform",
]
