"""
Observable values for settings records.

An ObservableProperty pairs a value with the callbacks that are told about
every assignment. A Field declares one property per instance of the owning
class, so ``record.width = 640`` notifies the listeners of ``width``.
"""

from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Listener = Callable[["ObservableProperty"], None]


class ObservableProperty(Generic[T]):
    def __init__(self, owner: Any, name: str, value: T) -> None:
        self.owner = owner
        self.name = name
        self._value = value
        self._listeners: list[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Store the value and notify every listener once, in registration order."""
        self._value = value
        for listener in list(self._listeners):
            listener(self)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def __repr__(self) -> str:
        return f"ObservableProperty({self.name}={self._value!r})"


class Field(Generic[T]):
    """Descriptor exposing an ObservableProperty as a plain attribute."""

    def __init__(
        self,
        default: T | Callable[[], T],
        key: Optional[str] = None,
        coerce: Optional[Callable[[Any], T]] = None,
    ) -> None:
        self._default = default
        self.key = key
        self.coerce = coerce
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name

    def default(self) -> T:
        if callable(self._default):
            return self._default()
        return self._default

    def property_of(self, instance: Any) -> ObservableProperty[T]:
        properties = instance.__dict__.setdefault("_properties", {})
        prop = properties.get(self.name)
        if prop is None:
            prop = ObservableProperty(instance, self.name, self.default())
            properties[self.name] = prop
        return prop

    def __get__(self, instance: Any, owner: type | None = None):
        if instance is None:
            return self
        return self.property_of(instance).get()

    def __set__(self, instance: Any, value: T) -> None:
        if self.coerce is not None:
            value = self.coerce(value)
        self.property_of(instance).set(value)


def fields_of(cls: type) -> list[Field]:
    """All Field descriptors of a class, in declaration order."""
    result = []
    for klass in reversed(cls.__mro__):
        for attr in vars(klass).values():
            if isinstance(attr, Field) and attr not in result:
                result.append(attr)
    return result
