"""Trace file parsing.

A trace line that describes a data access starts with a single space:

     L 10,1
     S 7ff0005c8,8
     M 0421c7f0,4
    I  0400d7d4,8

The operation letter is followed by a hex address and a decimal byte
count. Lines without the leading space (instruction fetches) are skipped.
"""
from enum import Enum
from typing import Iterable, Iterator, NamedTuple, Optional

MAX_ADDRESS = (1 << 64) - 1


class TraceFormatError(ValueError):
    """Raised for a data-access line that cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class Operation(Enum):
    LOAD = 'L'
    STORE = 'S'
    MODIFY = 'M'
    INSTRUCTION = 'I'


class TraceRecord(NamedTuple):
    operation: Operation
    address: int
    length: int

    def __str__(self):
        return f"{self.operation.value} {self.address:x},{self.length}"


DATA_OPERATIONS = {Operation.LOAD, Operation.STORE, Operation.MODIFY}


def parse_line(line: str) -> Optional[TraceRecord]:
    """Parse one trace line, returning None for lines that are not data accesses."""
    if not line.startswith(' '):
        return None
    body = line.strip()
    if not body:
        return None

    parts = body.replace(',', ' ').split()
    if len(parts) != 3:
        raise TraceFormatError(f"expected '<op> <hex-address>,<length>', got {body!r}")
    op, addr, length = parts

    try:
        operation = Operation(op)
    except ValueError:
        raise TraceFormatError(f"unknown operation {op!r}") from None
    if operation not in DATA_OPERATIONS:
        raise TraceFormatError(f"operation {op!r} is not a data access")

    try:
        address = int(addr, 16)
    except ValueError:
        raise TraceFormatError(f"bad hex address {addr!r}") from None
    if not 0 <= address <= MAX_ADDRESS:
        raise TraceFormatError(f"address {addr!r} does not fit in 64 bits")

    try:
        size = int(length, 10)
    except ValueError:
        raise TraceFormatError(f"bad length {length!r}") from None
    if size < 0:
        raise TraceFormatError(f"negative length {size}")

    return TraceRecord(operation, address, size)


def read_trace(lines: Iterable[str]) -> Iterator[TraceRecord]:
    """Yield the data-access records of a trace, skipping everything else."""
    for number, line in enumerate(lines, start=1):
        try:
            record = parse_line(line.rstrip('\r\n'))
        except TraceFormatError as exc:
            raise TraceFormatError(str(exc), line_number=number) from None
        if record is not None:
            yield record
