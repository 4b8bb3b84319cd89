import re
from datetime import datetime

# Result digit is the last decimal digit of the block id; hex letters are ignored.

_DIGIT = re.compile(r"\d")


def derive_result_from_hash(block_hash: str) -> int:
    if not block_hash:
        return 0
    digits = _DIGIT.findall(block_hash)
    if not digits:
        return 0
    return int(digits[-1])


def parity_of(value: int) -> str:
    return 'EVEN' if value % 2 == 0 else 'ODD'


def size_of(value: int) -> str:
    return 'BIG' if value >= 5 else 'SMALL'


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")
