from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EncapsulationConfig:
    content_class: str = "content"  # attribute marking elements inside the component
    host_class: str = "host"  # attribute marking the component's host element
    legacy: bool = False  # leave everything after :host unscoped

    def __post_init__(self) -> None:
        if not self.content_class:
            raise ValueError("content_class must be a non-empty string")
        if not self.host_class:
            raise ValueError("host_class must be a non-empty string")

    @classmethod
    def for_component(cls, component_id: str, *, legacy: bool = False) -> EncapsulationConfig:
        """Derive marker names from a component's generated identifier."""
        if not component_id:
            raise ValueError("component_id must be a non-empty string")
        return cls(
            content_class=f"_ngcontent-{component_id}",
            host_class=f"_nghost-{component_id}",
            legacy=legacy,
        )
