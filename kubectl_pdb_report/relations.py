from collections.abc import Iterable

from kubectl_pdb_report.model import PDBRecord, PodRecord, PriorityClassRecord


def is_subset_match(selector: dict[str, str], labels: dict[str, str]) -> bool:
    """
    True when every selector key is present in labels with an equal value.
    An empty selector never matches.
    """
    if not selector:
        return False
    return all(k in labels and labels[k] == v for k, v in selector.items())


def find_matching_pdb(
    pod: PodRecord, pdbs: Iterable[PDBRecord]
) -> PDBRecord | None:
    """
    Return the first PDB in listing order whose matchLabels select the pod.
    Other namespaces and PDBs without matchLabels are excluded upfront.
    """
    candidates = (
        pdb for pdb in pdbs if pdb.namespace == pod.namespace and pdb.match_labels
    )
    for pdb in candidates:
        if is_subset_match(pdb.match_labels, pod.labels):
            return pdb
    return None


def resolve_priority(
    name: str | None, priority_classes: Iterable[PriorityClassRecord]
) -> int | None:
    if name is None:
        return None
    for pc in priority_classes:
        if pc.name == name:
            return pc.value
    return None


def owning_replicaset(pod: PodRecord) -> str | None:
    for ref in pod.owner_references:
        if ref.kind == "ReplicaSet":
            return ref.name
    return None
