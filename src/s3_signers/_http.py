# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass, replace
from functools import cached_property
from urllib.parse import urlsplit, urlunsplit

import s3_signers.interfaces.http as interfaces_http

from ._utils import encode_path


class Field(interfaces_http.Field):
    """A header name with one or more values.

    Field names are case insensitive. The supplied casing is preserved for
    transmission while lookups in :class:`Fields` use the lowercased name.
    """

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_string(self, delimiter: str = ",") -> str:
        """Get the values joined by ``delimiter``.

        Zero values produce the empty string and a single value is returned as-is.
        """
        return delimiter.join(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, values={self.values!r})"


class Fields(interfaces_http.Fields):
    def __init__(self, initial: Iterable[interfaces_http.Field] | None = None):
        """Collection of header entries mapped by lowercased name.

        :param initial: Initial list of ``Field`` objects. Names must be unique
            once lowercased.
        """
        init_fields = list(initial) if initial is not None else []
        init_field_names = [self._normalize_field_name(fld.name) for fld in init_fields]
        fname_counter = Counter(init_field_names)
        non_unique_names = [name for name, num in fname_counter.items() if num > 1]
        if non_unique_names:
            raise ValueError(
                "Field names of the initial list of fields must be unique. The "
                "following normalized field names appear more than once: "
                f"{', '.join(non_unique_names)}."
            )
        self.entries: OrderedDict[str, interfaces_http.Field] = OrderedDict(
            zip(init_field_names, init_fields)
        )

    def set_field(self, field: interfaces_http.Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        self.__setitem__(field.name, field)

    def __setitem__(self, name: str, field: interfaces_http.Field) -> None:
        """Set or override entry for a Field name."""
        normalized_name = self._normalize_field_name(name)
        normalized_field_name = self._normalize_field_name(field.name)
        if normalized_name != normalized_field_name:
            raise ValueError(
                f"Supplied key {name} does not match Field.name "
                f"provided: {normalized_field_name}"
            )
        self.entries[normalized_name] = field

    def get(
        self, key: str, default: interfaces_http.Field | None = None
    ) -> interfaces_http.Field | None:
        return self[key] if key in self else default

    def get_value(self, key: str) -> str:
        """Get the comma-joined values of a field, or ``""`` when it is absent."""
        field = self.get(key)
        return "" if field is None else field.as_string()

    def __getitem__(self, name: str) -> interfaces_http.Field:
        return self.entries[self._normalize_field_name(name)]

    def __delitem__(self, name: str) -> None:
        del self.entries[self._normalize_field_name(name)]

    def _normalize_field_name(self, name: str) -> str:
        return name.lower()

    def __eq__(self, other: object) -> bool:
        """Entries must match in values and order."""
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __iter__(self) -> Iterator[interfaces_http.Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries


def _host_from_netloc(netloc: str) -> str:
    # Unlike SplitResult.hostname, keeps the case and the IPv6 brackets.
    host_port = netloc.rpartition("@")[2]
    if host_port.startswith("["):
        return host_port[: host_port.find("]") + 1]
    return host_port.partition(":")[0]


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Target location of an :py:class:`AWSRequest`."""

    scheme: str = "https"
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``bucket.s3.amazonaws.com``. IPv6 literals keep
    their brackets, for example ``[::1]``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI. May be raw or already percent-encoded."""

    query: str | None = None
    """Query component of the URI as an encoded string."""

    @classmethod
    def from_url(cls, url: str) -> URI:
        """Parse an absolute URL string.

        Malformed URLs are rejected by :func:`urllib.parse.urlsplit`; this method
        adds no validation of its own.
        """
        parts = urlsplit(url)
        host = _host_from_netloc(parts.netloc)
        if not host:
            raise ValueError(f"URL has no host: {url!r}")
        return cls(
            scheme=parts.scheme or "https",
            host=host,
            port=parts.port,
            path=parts.path or None,
            query=parts.query or None,
        )

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``.

        ``port`` is only included if set.
        """
        return self._netloc

    # cached_property does NOT behave like property, it actually allows for setting.
    # Therefore we need a layer of indirection.
    @cached_property
    def _netloc(self) -> str:
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.host

    def with_query(self, query: str | None) -> URI:
        """Return a copy of this URI with a different query string."""
        return replace(self, query=query or None)

    def build(self) -> str:
        """Construct the URL sent on the wire.

        The path is written in its canonical percent-encoded form so that the
        request line matches the path that was signed.
        """
        components = (
            self.scheme,
            self.netloc,
            encode_path(self.path),
            self.query or "",
            "",
        )
        return urlunsplit(components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URI):
            return False
        return (
            self.scheme == other.scheme
            and self.host == other.host
            and self.port == other.port
            and self.path == other.path
            and self.query == other.query
        )


class AWSRequest(interfaces_http.Request):
    def __init__(
        self,
        *,
        destination: URI,
        method: str,
        body: Iterable[bytes] | None = None,
        fields: Fields | None = None,
    ):
        self.destination = destination
        self.method = method
        self.body = body
        self.fields = fields if fields is not None else Fields()

    def __deepcopy__(self, memo: dict[int, AWSRequest] | None = None) -> AWSRequest:
        if memo is None:
            memo = {}

        if id(self) in memo:
            return memo[id(self)]

        # the destination doesn't need to be copied because it's immutable
        # the body can't be copied because it may be a stream
        new_instance = self.__class__(
            destination=self.destination,
            body=self.body,
            method=self.method,
            fields=deepcopy(self.fields, memo),
        )
        memo[id(self)] = new_instance
        return new_instance

    def __repr__(self) -> str:
        return (
            f"AWSRequest(method={self.method!r}, "
            f"destination={self.destination.build()!r}, fields={self.fields!r})"
        )
