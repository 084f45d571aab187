"""Mermaid helpers for generated fault-tree diagrams."""

import re

from gensafe.models import FTAReport

FTA_STYLE_BLOCK = """

    %% Professional FTA Styling
    classDef gate fill:#2c3e50,stroke:#34495e,stroke-width:3px,color:#ffffff,font-weight:700;
    classDef event fill:#ecf0f1,stroke:#2c3e50,stroke-width:2px,color:#2c3e50,font-weight:600;
    classDef top fill:#e74c3c,stroke:#c0392b,stroke-width:3px,color:#ffffff,font-weight:700;
    classDef intermediate fill:#3498db,stroke:#2980b9,stroke-width:2px,color:#ffffff,font-weight:600;
    classDef basic fill:#f39c12,stroke:#e67e22,stroke-width:2px,color:#ffffff,font-weight:600;

    class G1,G2,G3,G4,G5,G6 gate;
    class B,C,D,E,F,G,H,I,J,K intermediate;
    class L,M,N,O,P,Q,R,S,T,U basic;
    class A top;"""

# Node labels and edge labels: ([..]), [..], {..}, (..), |..|
_LABELS = re.compile(r"\(\[.*?\]\)|\[.*?\]|\{.*?\}|\(.*?\)|\|.*?\|")
_IDENT = re.compile(r"[A-Za-z_]\w*")
_KEYWORDS = {"flowchart", "graph", "subgraph", "end", "direction", "TD", "TB", "LR", "RL", "BT"}
_SKIP_PREFIXES = ("%%", "classDef ", "class ", "style ", "linkStyle ", "click ")


def apply_fta_styling(diagram: str) -> str:
    """Append the fixed FTA class definitions and node-class assignments.

    The assignment list is fixed (A top, B-K intermediate, L-U basic, G1-G6
    gates) and is applied whatever ids the diagram actually uses.
    """
    return diagram + FTA_STYLE_BLOCK


def diagram_node_ids(diagram: str) -> list[str]:
    """Node ids referenced by a flowchart, in order of first appearance."""
    seen: dict[str, None] = {}
    for raw in diagram.splitlines():
        line = raw.strip()
        if not line or line.startswith(_SKIP_PREFIXES):
            continue
        for ident in _IDENT.findall(_LABELS.sub(" ", line)):
            if ident not in _KEYWORDS:
                seen.setdefault(ident, None)
    return list(seen)


def unresolved_node_ids(report: FTAReport) -> list[str]:
    """Diagram node ids that have no matching entry in the events or gates lists."""
    known = {e.id for e in report.events} | {g.id for g in report.gates}
    return [n for n in diagram_node_ids(report.mermaid_diagram) if n not in known]
