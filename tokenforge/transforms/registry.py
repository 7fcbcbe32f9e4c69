"""Transform and transform-group registry.

Registries are plain objects owned by a build configuration; there is no
process-wide registry to mutate.
"""

from typing import Dict, Iterable, List

from tokenforge.core.errors import TransformError
from tokenforge.transforms.base import Transform


class TransformRegistry:
    """Named transforms and ordered named groups of them."""

    def __init__(self):
        self._transforms: Dict[str, Transform] = {}
        self._groups: Dict[str, List[str]] = {}

    @classmethod
    def with_builtins(cls) -> "TransformRegistry":
        """Create a registry pre-loaded with the built-in transforms and groups."""
        from tokenforge.transforms.builtin import BUILTIN_GROUPS, builtin_transforms

        registry = cls()
        for transform in builtin_transforms():
            registry.register(transform)
        for name, members in BUILTIN_GROUPS.items():
            registry.register_group(name, members)
        return registry

    def register(self, transform: Transform) -> None:
        """Register a transform, replacing any previous one of the same name."""
        self._transforms[transform.name] = transform

    def register_group(self, name: str, transform_names: Iterable[str]) -> None:
        """Register an ordered group.

        Raises:
            TransformError: If a member transform is not registered
        """
        members = list(transform_names)
        unknown = [member for member in members if member not in self._transforms]
        if unknown:
            raise TransformError(
                f"Transform group {name!r} references unknown transforms: {', '.join(unknown)}"
            )
        self._groups[name] = members

    def get(self, name: str) -> Transform:
        try:
            return self._transforms[name]
        except KeyError:
            raise TransformError(f"Unknown transform: {name}", name)

    def get_group(self, name: str) -> List[Transform]:
        """Resolve a group name to its ordered transforms.

        Raises:
            TransformError: If the group is unknown
        """
        if name not in self._groups:
            raise TransformError(f"Unknown transform group: {name}")
        return [self._transforms[member] for member in self._groups[name]]

    def has_group(self, name: str) -> bool:
        return name in self._groups

    def transform_names(self) -> List[str]:
        return list(self._transforms)

    def group_names(self) -> List[str]:
        return list(self._groups)

    def __contains__(self, name: object) -> bool:
        return name in self._transforms

    def __repr__(self) -> str:
        return f"<TransformRegistry transforms={len(self._transforms)} groups={self.group_names()}>"
