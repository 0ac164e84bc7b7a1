"""Request headers as the media layer reads them.

Negotiation only ever asks for a handful of headers (``Accept``,
``User-Agent``, ``X-Requested-With``, ...) by name, in any case. Headers
are decoded once from the ASGI byte pairs into a lowercase lookup.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive header lookup.

    When a header is repeated, the first value wins.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, str] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self._values = values

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> "Headers":
        """Build Headers from a plain ``{name: value}`` mapping."""
        return cls(
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in headers.items()
        )

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"
