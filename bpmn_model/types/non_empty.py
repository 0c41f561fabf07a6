"""
Non-Empty List

An ordered container that always holds at least one element. The first
element is stored separately from the remainder, and the public API only
ever grows the container, so "at least one" holds for the value's whole
lifetime without runtime emptiness checks at the call sites.

The type plugs into pydantic v2: a field annotated ``NonEmptyList[T]``
validates from a plain list (or JSON array) of ``T`` with at least one
item and serializes back to a plain list.
"""

from typing import Any, Generic, Iterable, Iterator, List, Tuple, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import PydanticCustomError, core_schema

T = TypeVar("T")


class NonEmptyList(Generic[T]):
    """A list that guarantees at least one element exists."""

    __slots__ = ("_head", "_tail")

    def __init__(self, head: T):
        """Create a list holding a single element."""
        self._head = head
        self._tail: List[T] = []

    @classmethod
    def from_value(cls, value: T) -> "NonEmptyList[T]":
        """Wrap a bare value in a one-element list."""
        return cls(value)

    @property
    def head(self) -> T:
        return self._head

    @property
    def tail(self) -> Tuple[T, ...]:
        """Snapshot of the elements after the head (may be empty)."""
        return tuple(self._tail)

    def first(self) -> T:
        """Get the first element (guaranteed to exist)."""
        return self._head

    def append(self, value: T) -> None:
        """Add an element to the end."""
        self._tail.append(value)

    def extend(self, values: Iterable[T]) -> None:
        """Append each value in order."""
        for value in values:
            self.append(value)

    def to_list(self) -> List[T]:
        """Return a fresh plain list, head first."""
        return [self._head, *self._tail]

    def __len__(self) -> int:
        return 1 + len(self._tail)

    def __iter__(self) -> Iterator[T]:
        yield self._head
        yield from self._tail

    def __getitem__(self, index: int) -> T:
        if not isinstance(index, int):
            raise TypeError("NonEmptyList indices must be integers")
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("NonEmptyList index out of range")
        return self._head if index == 0 else self._tail[index - 1]

    def __copy__(self) -> "NonEmptyList[T]":
        # Fresh tail list; elements are shared
        return self._from_items(self.to_list())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonEmptyList):
            return NotImplemented
        return self._head == other._head and self._tail == other._tail

    # Mutable through append, so instances are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NonEmptyList({self.to_list()!r})"

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def _from_items(cls, items: List[T]) -> "NonEmptyList[T]":
        head, *tail = items
        result = cls(head)
        result.extend(tail)
        return result

    @staticmethod
    def _unwrap(value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("missing", "Field required")
        if isinstance(value, NonEmptyList):
            return value.to_list()
        return value

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        args = get_args(source_type)
        item_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()

        # min_length=1 makes an empty array fail with a "too_short" error
        list_schema = core_schema.list_schema(item_schema, min_length=1)

        return core_schema.no_info_after_validator_function(
            cls._from_items,
            core_schema.no_info_before_validator_function(cls._unwrap, list_schema),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_list(),
                return_schema=list_schema,
            ),
        )


__all__ = ["NonEmptyList"]
