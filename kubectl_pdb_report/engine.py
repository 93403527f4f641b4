import logging
from collections.abc import Iterable

from kubectl_pdb_report.model import (
    PDBRecord,
    PodRecord,
    PriorityClassRecord,
    ReportRow,
)
from kubectl_pdb_report.relations import (
    find_matching_pdb,
    owning_replicaset,
    resolve_priority,
)
from kubectl_pdb_report.snapshot import ClusterSnapshot

logger = logging.getLogger(__name__)


def build_row(
    pod: PodRecord,
    pdbs: Iterable[PDBRecord],
    priority_classes: Iterable[PriorityClassRecord],
) -> ReportRow:
    pdb = find_matching_pdb(pod, pdbs)
    return ReportRow(
        pod_name=pod.name,
        namespace=pod.namespace,
        replicaset=owning_replicaset(pod),
        priority_class=pod.priority_class_name,
        priority_value=resolve_priority(pod.priority_class_name, priority_classes),
        pdb_name=pdb.name if pdb else None,
        min_available=pdb.min_available if pdb else None,
        max_unavailable=pdb.max_unavailable if pdb else None,
    )


def build_report(snapshot: ClusterSnapshot) -> list[ReportRow]:
    """
    One row per pod, in the order the pods were listed.
    """
    rows = [
        build_row(pod, snapshot.pdbs, snapshot.priority_classes)
        for pod in snapshot.pods
    ]
    logger.debug(
        "Built %d rows, %d with a matching PDB",
        len(rows),
        sum(1 for r in rows if r.pdb_name is not None),
    )
    return rows
