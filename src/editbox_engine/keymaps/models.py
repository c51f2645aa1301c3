"""Dataclasses describing edit box key bindings and their actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+shift+left``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"shift+home"`` style notation."""

        parts = [part for part in token.strip().split("+") if part]
        if not parts:
            raise ValueError("token cannot be empty")
        return cls(parts[-1], tuple(parts[:-1]))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used when a binding fires."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with an action."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def token(self) -> str:
        return self.stroke.token

    @classmethod
    def on(
        cls, token: str, action_id: str, *, description: str = "", id: str | None = None
    ) -> "Binding":
        stroke = KeyStroke.parse(token)
        return cls(
            id=id or f"editbox.{stroke.token}",
            stroke=stroke,
            action_id=action_id,
            description=description,
        )


__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "normalize_modifiers",
]
