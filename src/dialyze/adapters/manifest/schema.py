"""Validated form of an application manifest."""

from __future__ import annotations

import re
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator

from dialyze.domain.model import Component

from .terms import Atom

_RUNTIME_DEPENDENCY_RE: Final = re.compile(r"^(.+)-\d+(?:\.\d+)*$")


def strip_version(runtime_dependency: str) -> str:
    """Return the component name of a ``name-1.2.3`` runtime dependency."""

    match = _RUNTIME_DEPENDENCY_RE.match(runtime_dependency)
    if match is None:
        raise ValueError(f"Invalid runtime dependency {runtime_dependency!r}")
    return match.group(1)


class ApplicationManifest(BaseModel):
    """The keys of ``{application, Name, Properties}`` that resolution needs."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    modules: tuple[str, ...] = ()
    applications: tuple[str, ...] = ()
    included_applications: tuple[str, ...] = ()
    runtime_dependencies: tuple[str, ...] = ()

    @field_validator("runtime_dependencies", mode="after")
    @classmethod
    def _strip_runtime_versions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(strip_version(dependency) for dependency in value)

    @classmethod
    def from_term(cls, term: object) -> ApplicationManifest:
        """Validate a parsed ``.app`` term."""

        if (
            not isinstance(term, tuple)
            or len(term) != 3  # noqa: PLR2004
            or not isinstance(term[0], Atom)
            or term[0] != "application"
            or not isinstance(term[1], Atom)
            or not isinstance(term[2], list)
        ):
            raise ValueError("expected {application, Name, Properties}")
        properties: dict[str, object] = {}
        for entry in term[2]:
            if (
                not isinstance(entry, tuple)
                or len(entry) != 2  # noqa: PLR2004
                or not isinstance(entry[0], Atom)
            ):
                raise ValueError(f"malformed application property {entry!r}")
            properties[str(entry[0])] = entry[1]
        properties.pop("name", None)
        return cls.model_validate({**properties, "name": str(term[1])})

    @property
    def dependencies(self) -> frozenset[str]:
        return frozenset(
            (*self.runtime_dependencies, *self.included_applications, *self.applications)
        )

    def to_component(self) -> Component:
        return Component(
            name=self.name,
            modules=frozenset(self.modules),
            dependencies=self.dependencies,
        )
