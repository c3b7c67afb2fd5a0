"""
Header class registry with decorator support.

Maps the protocol number found in an IP header to the header class that
decodes what follows it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from divertview.core.enums import Protocol

if TYPE_CHECKING:
    from divertview.headers.base import Header


class HeaderRegistry:
    """
    Registry of header classes keyed by IP protocol number.

    Supports registration via decorator and lookup by raw number, so
    unrecognized numbers simply find nothing.
    """

    def __init__(self):
        self._by_protocol: dict[int, type[Header]] = {}

    def register(self, protocol: Protocol, header_cls: type[Header]) -> type[Header]:
        """Register a header class for a protocol number."""
        if not header_cls.name:
            raise ValueError(f"Header {header_cls.__name__} must have a name")

        number = int(protocol)
        if number in self._by_protocol:
            raise ValueError(f"Protocol {Protocol(number).name} already registered")

        self._by_protocol[number] = header_cls
        return header_cls

    def get(self, number: int) -> type[Header] | None:
        """Get the header class for a raw protocol number."""
        return self._by_protocol.get(number)

    def list_protocols(self) -> list[Protocol]:
        """List all registered protocols."""
        return [Protocol(n) for n in self._by_protocol]

    def unregister(self, protocol: Protocol) -> bool:
        """Unregister the header class for a protocol."""
        return self._by_protocol.pop(int(protocol), None) is not None

    def clear(self) -> None:
        self._by_protocol.clear()


# Global registry instance
_global_registry = HeaderRegistry()


def get_global_registry() -> HeaderRegistry:
    """Get the global header registry."""
    return _global_registry


def register_header(
    protocol: Protocol,
    registry: HeaderRegistry | None = None
) -> Callable[[type[Header]], type[Header]]:
    """
    Decorator to register a header class for an IP protocol number.

    Args:
        protocol: Protocol number carried in the IP header
        registry: Registry to use (defaults to global)

    Example:
        @register_header(Protocol.UDP)
        class UDPHeader(TransportHeader):
            pass
    """
    if registry is None:
        registry = _global_registry

    def decorator(cls: type[Header]) -> type[Header]:
        cls.protocol_id = Protocol(protocol)
        return registry.register(protocol, cls)

    return decorator
