import json
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from kubectl_pdb_report.errors import SnapshotLoadError

# ----------------------------
# Records
# ----------------------------


@dataclass(frozen=True)
class OwnerReference:
    kind: str
    name: str


@dataclass(frozen=True)
class PodRecord:
    name: str
    namespace: str
    labels: dict[str, str] = field(default_factory=dict)
    owner_references: tuple[OwnerReference, ...] = ()
    priority_class_name: str | None = None


@dataclass(frozen=True)
class PDBRecord:
    """
    PodDisruptionBudget reduced to what the report needs.
    Only spec.selector.matchLabels is kept, an empty mapping matches nothing.
    """

    name: str
    namespace: str
    match_labels: dict[str, str] = field(default_factory=dict)
    min_available: int | str | None = None
    max_unavailable: int | str | None = None


@dataclass(frozen=True)
class PriorityClassRecord:
    name: str
    value: int


@dataclass(frozen=True)
class ReportRow:
    pod_name: str
    namespace: str
    replicaset: str | None = None
    priority_class: str | None = None
    priority_value: int | None = None
    pdb_name: str | None = None
    min_available: int | str | None = None
    max_unavailable: int | str | None = None

    def values(self) -> tuple[Any, ...]:
        return (
            self.pod_name,
            self.namespace,
            self.replicaset,
            self.priority_class,
            self.priority_value,
            self.pdb_name,
            self.min_available,
            self.max_unavailable,
        )


# ----------------------------
# Parsing utilities
# ----------------------------


def load_json(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_snapshot(path: str) -> Any:
    """
    Load a `kubectl get -o json` or `-o yaml` dump from disk.
    """
    ext = os.path.splitext(path)[1].lower()
    try:
        if ext in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                return yaml.safe_load(f)
        return load_json(path)
    except OSError as exc:
        raise SnapshotLoadError(f"cannot read {path}: {exc.strerror}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SnapshotLoadError(f"cannot parse {path}: {exc}") from exc


def list_items(doc: Any) -> list[dict[str, Any]]:
    if doc is None:
        return []
    if isinstance(doc, list):
        return doc
    if "items" in doc or str(doc.get("kind", "")).endswith("List"):
        return doc.get("items") or []
    # a bare object only counts when it carries metadata
    if not doc.get("metadata"):
        return []
    return [doc]


def _metadata(obj: dict[str, Any]) -> dict[str, Any]:
    return obj.get("metadata") or {}


def _string_map(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(k): str(v) for k, v in raw.items()}


def parse_pod(obj: dict[str, Any]) -> PodRecord:
    meta = _metadata(obj)
    owners = tuple(
        OwnerReference(kind=ref.get("kind", ""), name=ref.get("name", ""))
        for ref in meta.get("ownerReferences") or []
    )
    return PodRecord(
        name=meta.get("name", ""),
        namespace=meta.get("namespace", ""),
        labels=_string_map(meta.get("labels")),
        owner_references=owners,
        priority_class_name=(obj.get("spec") or {}).get("priorityClassName"),
    )


def parse_pdb(obj: dict[str, Any]) -> PDBRecord:
    meta = _metadata(obj)
    spec = obj.get("spec") or {}
    selector = spec.get("selector") or {}
    return PDBRecord(
        name=meta.get("name", ""),
        namespace=meta.get("namespace", ""),
        match_labels=_string_map(selector.get("matchLabels")),
        min_available=spec.get("minAvailable"),
        max_unavailable=spec.get("maxUnavailable"),
    )


def parse_priority_class(obj: dict[str, Any]) -> PriorityClassRecord:
    name = _metadata(obj).get("name", "")
    raw = obj.get("value")
    # bool is an int subclass but never a valid priority
    if isinstance(raw, bool):
        raw = None
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise SnapshotLoadError(
            f"PriorityClass {name!r} has an invalid value: {raw!r}"
        ) from exc
    return PriorityClassRecord(name=name, value=value)


def parse_pods(doc: Any) -> tuple[PodRecord, ...]:
    return tuple(parse_pod(item) for item in list_items(doc))


def parse_pdbs(doc: Any) -> tuple[PDBRecord, ...]:
    return tuple(parse_pdb(item) for item in list_items(doc))


def parse_priority_classes(doc: Any) -> tuple[PriorityClassRecord, ...]:
    return tuple(parse_priority_class(item) for item in list_items(doc))
