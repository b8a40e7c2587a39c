"""Configuration loader for the Vessel container model."""

from pathlib import Path
from typing import Any

import yaml

from vessel.core.container import Container, Properties, State
from vessel.core.units import ResourceTag, resolve_units_type

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
CONTAINERS_PATH: Path = DATA_DIR / "containers.yaml"

_RESOURCE_FIELDS: tuple[str, ...] = ("name", "units")
_CONTAINER_FIELDS: tuple[str, ...] = ("name", "resource", "capacity")


def _read(path: Path | None) -> dict[str, Any]:
    config_path = path or CONTAINERS_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Container config not found: {config_path}")

    with open(config_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"Container config {config_path} must be a mapping")
    return data


def _check_fields(kind: str, idx: int, entry: Any, fields: tuple[str, ...]) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"{kind} entry {idx} must be a mapping")
    for field in fields:
        if field not in entry:
            raise ValueError(
                f"{kind} entry {idx} ({entry.get('name', '<unknown>')}) "
                f"is missing required field '{field}'"
            )


def _number(kind: str, idx: int, entry: dict, field: str) -> float:
    val = entry[field]
    # bool is an int subclass but never a quantity.
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValueError(
            f"{kind} entry {idx} ({entry['name']}): "
            f"'{field}' must be numeric, got {type(val).__name__}"
        )
    if val < 0:
        raise ValueError(
            f"{kind} entry {idx} ({entry['name']}): '{field}' must be >= 0, got {val}"
        )
    return val


def _parse_tags(data: dict[str, Any]) -> dict[str, ResourceTag]:
    tags: dict[str, ResourceTag] = {}
    for idx, entry in enumerate(data.get("resources") or []):
        _check_fields("Resource", idx, entry, _RESOURCE_FIELDS)
        name = str(entry["name"])
        if name in tags:
            raise ValueError(f"Resource entry {idx}: duplicate resource '{name}'")
        tags[name] = ResourceTag(
            name=name, units_type=resolve_units_type(str(entry["units"]))
        )
    return tags


def load_resource_tags(path: Path | None = None) -> dict[str, ResourceTag]:
    """Load the resource-to-units bindings from a YAML file.

    Args:
        path: Optional override for the config file path.

    Returns:
        Mapping of resource name to :class:`ResourceTag`.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If an entry is malformed, duplicated or names an
            unknown units type.
    """
    return _parse_tags(_read(path))


def load_containers(path: Path | None = None) -> dict[str, Container]:
    """Load the container inventory from a YAML file.

    Each entry is validated and converted into a :class:`Container` bound to
    its declared resource.  Containers start full unless the entry sets
    ``fill_level``, which is loaded as a :class:`State`.

    Args:
        path: Optional override for the config file path.

    Returns:
        Mapping of container name to :class:`Container`, in file order.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If any entry is missing fields, has non-numeric or
            negative quantities, references an unknown resource, or reuses
            a name.
    """
    data = _read(path)
    tags = _parse_tags(data)
    containers: dict[str, Container] = {}

    for idx, entry in enumerate(data.get("containers") or []):
        _check_fields("Container", idx, entry, _CONTAINER_FIELDS)
        name = str(entry["name"])
        if name in containers:
            raise ValueError(f"Container entry {idx}: duplicate container '{name}'")

        resource = str(entry["resource"])
        if resource not in tags:
            raise ValueError(
                f"Container entry {idx} ({name}): unknown resource '{resource}'"
            )

        capacity = _number("Container", idx, entry, "capacity")
        container = Container(Properties(capacity=capacity), tags[resource], name)

        if "fill_level" in entry:
            fill_level = _number("Container", idx, entry, "fill_level")
            if fill_level > capacity:
                raise ValueError(
                    f"Container entry {idx} ({name}): 'fill_level' {fill_level} "
                    f"exceeds capacity {capacity}"
                )
            container.load_state(State(fill_level=fill_level))

        containers[name] = container

    return containers
