"""In-memory data model for the editor registry."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


def normalize_name(name: str) -> str:
    """Return the case-insensitive lookup key for an editor name."""

    return name.strip().casefold()


@dataclass(slots=True)
class EditorRecord:
    """One named editor definition."""

    name: str
    path: str
    description: str = ""
    default_options: tuple[str, ...] = ()
    is_default: bool = False

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "path": self.path,
            "description": self.description,
            "default_options": list(self.default_options),
            "is_default": self.is_default,
        }


@dataclass(slots=True)
class Registry:
    """Editor records keyed by normalized name plus the default pointer."""

    default_name: str = ""
    editors: dict[str, EditorRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.editors)

    def find(self, name: str) -> EditorRecord | None:
        return self.editors.get(normalize_name(name))

    def copy(self) -> Registry:
        """Return a copy whose records can be mutated independently."""

        return Registry(
            default_name=self.default_name,
            editors={key: replace(record) for key, record in self.editors.items()},
        )

    def records(self) -> list[EditorRecord]:
        """Return every record sorted by normalized name."""

        return [self.editors[key] for key in sorted(self.editors)]

    def invariant_violations(self) -> list[str]:
        """Describe every way this registry breaks the default invariants."""

        problems: list[str] = []
        flagged = [record.name for record in self.editors.values() if record.is_default]
        if len(flagged) > 1:
            problems.append(f"several editors flagged as default: {', '.join(flagged)}")

        if not self.editors:
            if self.default_name:
                problems.append(
                    f"default editor '{self.default_name}' set on an empty registry"
                )
            return problems

        default = self.find(self.default_name) if self.default_name else None
        if default is None:
            problems.append(
                f"default editor '{self.default_name}' is not a registered editor"
            )
        elif not default.is_default or flagged != [default.name]:
            problems.append(
                f"default flag does not match default editor '{self.default_name}'"
            )

        for key, record in self.editors.items():
            if key != record.key:
                problems.append(f"editor '{record.name}' stored under key '{key}'")
        return problems
