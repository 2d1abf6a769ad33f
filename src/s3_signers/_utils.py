# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import re
from collections.abc import Iterable
from string import ascii_letters, digits
from typing import Final
from urllib.parse import parse_qsl, quote

from .interfaces.http import URI

UNRESERVED: Final = frozenset(ascii_letters + digits + "-_.~")

# Characters collapsed by trim_all. Non-ASCII whitespace is left alone.
_SIGNING_WHITESPACE: Final = re.compile(r"[ \t\v\r\n\f]+")
_PERCENT_TRIPLET: Final = re.compile(r"%[0-9A-Fa-f]{2}")
_SAFE_PATH: Final = re.compile(r"^[A-Za-z0-9\-_.~/]*$")


def encode_path(path: str | None) -> str:
    """Percent-encode an object path for signing and for the request line.

    Every byte of the UTF-8 representation that is not an unreserved character or
    ``/`` is written as an uppercase ``%XX`` triplet. Triplets that are already
    present are kept, so ``encode_path(encode_path(p)) == encode_path(p)``.

    :param path: The path component of a URI. ``None`` and ``""`` encode to ``/``.
    """
    if not path:
        return "/"
    if _SAFE_PATH.match(path):
        return path

    encoded: list[str] = []
    position = 0
    length = len(path)
    while position < length:
        char = path[position]
        if char == "%" and _PERCENT_TRIPLET.match(path, position):
            encoded.append(path[position : position + 3].upper())
            position += 3
            continue
        if char == "/" or char in UNRESERVED:
            encoded.append(char)
        else:
            encoded.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
        position += 1
    return "".join(encoded)


def encode_url_to_path(uri: URI, virtual_host: bool) -> str:
    """Build the ``/bucket/key`` path of a request regardless of addressing style.

    With virtual-host addressing the bucket is the first label of the host and is
    prepended to the path. Hosts without a ``.`` and IPv6 literals cannot carry a
    bucket label and fall back to the path as-is.
    """
    path = uri.path or ""
    if virtual_host:
        bucket, dot, _ = uri.host.partition(".")
        if dot and not uri.host.startswith("["):
            if not path.startswith("/"):
                path = f"/{path}"
            return encode_path(f"/{bucket}{path}")
    return encode_path(path)


def trim_all(value: str) -> str:
    """Collapse runs of signing whitespace into one space and strip the ends.

    Only space, tab, vertical tab, carriage return, line feed and form feed are
    considered whitespace; every other character is preserved verbatim.
    """
    return _SIGNING_WHITESPACE.sub(" ", value).strip(" ")


def uri_encode(value: str) -> str:
    """Percent-encode a query key or value over the unreserved character set."""
    return quote(string=value, safe="")


def parse_query(query: str | None) -> list[tuple[str, str]]:
    """Decode a raw query string into ordered ``(key, value)`` pairs.

    Blank values are kept so that sub-resources such as ``?acl`` survive.
    """
    if not query:
        return []
    return parse_qsl(qs=query, keep_blank_values=True)


def encode_query(params: Iterable[tuple[str, str]]) -> str:
    """Encode ``(key, value)`` pairs preserving their order."""
    return "&".join(f"{uri_encode(key)}={uri_encode(value)}" for key, value in params)
