"""starknet.id domain label encoding.

Each label of a domain is one felt: a little-endian base-38 number over the
basic alphabet (`a-z`, `0-9`, `-`). Code 37 escapes into a two-character
extended alphabet, and also marks a trailing `a` (which would otherwise be
a dropped leading zero). Runs of the last extended character at the end of
a label are stored in a compressed form and expanded on decode.
"""

from __future__ import annotations

from collections.abc import Iterable

BASIC_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789-"
BIG_ALPHABET = "这来"

_BASIC_SIZE = len(BASIC_ALPHABET)
_BASIC_SIZE_PLUS_ONE = _BASIC_SIZE + 1
_BIG_SIZE = len(BIG_ALPHABET)
_BIG_SIZE_PLUS_ONE = _BIG_SIZE + 1

ROOT_SUFFIX = "stark"


def _extract_stars(text: str) -> tuple[str, int]:
    k = 0
    while text.endswith(BIG_ALPHABET[-1]):
        text = text[:-1]
        k += 1
    return text, k


def decode(felt: int) -> str:
    """Decode one label felt into its string form."""
    decoded = ""
    while felt != 0:
        code = felt % _BASIC_SIZE_PLUS_ONE
        felt //= _BASIC_SIZE_PLUS_ONE
        if code == _BASIC_SIZE:
            next_felt = felt // _BIG_SIZE_PLUS_ONE
            if next_felt == 0:
                code2 = felt % _BIG_SIZE_PLUS_ONE
                felt = next_felt
                decoded += BASIC_ALPHABET[0] if code2 == 0 else BIG_ALPHABET[code2 - 1]
            else:
                decoded += BIG_ALPHABET[felt % _BIG_SIZE]
                felt //= _BIG_SIZE
        else:
            decoded += BASIC_ALPHABET[code]

    text, k = _extract_stars(decoded)
    if k:
        if k % 2 == 0:
            text += BIG_ALPHABET[-1] * (k // 2 - 1) + BIG_ALPHABET[0] + BASIC_ALPHABET[1]
        else:
            text += BIG_ALPHABET[-1] * ((k - 1) // 2 + 1)
        decoded = text
    return decoded


def encode(label: str) -> int:
    """Encode one label string into its felt. Inverse of `decode`."""
    if label.endswith(BIG_ALPHABET[0] + BASIC_ALPHABET[1]):
        text, k = _extract_stars(label[:-2])
        label = text + BIG_ALPHABET[-1] * (2 * (k + 1))
    else:
        text, k = _extract_stars(label)
        if k:
            label = text + BIG_ALPHABET[-1] * (1 + 2 * (k - 1))

    encoded = 0
    multiplier = 1
    last = len(label) - 1
    for i, char in enumerate(label):
        if char in BASIC_ALPHABET:
            index = BASIC_ALPHABET.index(char)
            if i == last and char == BASIC_ALPHABET[0]:
                # a trailing "a" is escaped so it is not lost as a zero digit
                encoded += multiplier * _BASIC_SIZE
                multiplier *= _BASIC_SIZE_PLUS_ONE * _BASIC_SIZE_PLUS_ONE
            else:
                encoded += multiplier * index
                multiplier *= _BASIC_SIZE_PLUS_ONE
        elif char in BIG_ALPHABET:
            encoded += multiplier * _BASIC_SIZE
            multiplier *= _BASIC_SIZE_PLUS_ONE
            new_id = (1 if i == last else 0) + BIG_ALPHABET.index(char)
            encoded += multiplier * new_id
            multiplier *= _BIG_SIZE
        else:
            raise ValueError(f"character {char!r} cannot be encoded in a starknet.id label")
    return encoded


def decode_domain(labels: Iterable[int]) -> str:
    """Decode a label sequence (subdomains first) into "label.label.stark"."""
    decoded = ""
    for label in labels:
        decoded += decode(label)
        if decoded:
            decoded += "."
    if not decoded:
        return decoded
    return decoded + ROOT_SUFFIX


def decode_root_domain(label: int) -> str:
    return decode_domain([label])
