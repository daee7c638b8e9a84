# seating_engine/solver/conflict_graph.py

"""
Conflict graph construction.

One vertex per active student, one edge per pair of students that share at
least one SEPARATE constraint. The edge ``weight`` counts how many constraints
share the pair, which is also how many violations the pair produces when seated
adjacently.
"""

from itertools import combinations
from typing import Dict, Iterable, Sequence
from uuid import UUID

import networkx as nx

from ..config import get_logger
from ..core.constraint_types import ConstraintKind, SeatingConstraint
from ..core.problem_model import Student

logger = get_logger("solver.conflict_graph")


def build_conflict_graph(
    students: Sequence[Student], constraints: Iterable[SeatingConstraint]
) -> nx.Graph:
    graph = nx.Graph()
    for student in students:
        graph.add_node(student.id, class_no=student.class_no)

    stale_refs = 0
    for constraint in constraints:
        if constraint.kind != ConstraintKind.SEPARATE:
            continue
        members = []
        for member_id in dict.fromkeys(constraint.member_ids):
            if member_id in graph:
                members.append(member_id)
            else:
                stale_refs += 1
        for a, b in combinations(members, 2):
            if graph.has_edge(a, b):
                graph[a][b]["weight"] += 1
                graph[a][b]["constraints"].append(constraint.id)
            else:
                graph.add_edge(a, b, weight=1, constraints=[constraint.id])

    if stale_refs:
        logger.debug(f"Ignored {stale_refs} constraint members not currently seated")
    logger.debug(
        f"Conflict graph: {graph.number_of_nodes()} students, "
        f"{graph.number_of_edges()} conflicting pairs"
    )
    return graph


def conflict_degrees(graph: nx.Graph) -> Dict[UUID, int]:
    """Number of conflict partners per student (unweighted edge count)."""
    return dict(graph.degree())


def partner_weights(graph: nx.Graph) -> Dict[UUID, Dict[UUID, int]]:
    """Adjacency map ``student -> {partner: weight}`` for fast lookups."""
    return {
        node: {partner: data["weight"] for partner, data in graph[node].items()}
        for node in graph.nodes
    }
