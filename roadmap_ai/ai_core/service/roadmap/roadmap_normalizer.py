from __future__ import annotations

from typing import Any, List, Mapping, Optional

from roadmap_ai.ai_core.domain.roadmap import DEFAULT_CATEGORY, DEFAULT_DIFFICULTY, DEFAULT_TITLE, Roadmap
from roadmap_ai.ai_core.domain.roadmap_link import DEFAULT_LINK_LABEL, RoadmapLink
from roadmap_ai.ai_core.domain.roadmap_step import RoadmapStep, StepType

_STEP_TYPES = {item.value: item for item in StepType}


def normalize(parsed: Any) -> Roadmap:
    """
    Build a canonical roadmap from a loosely typed model payload.

    Never raises. Missing or mistyped fields fall back to their defaults one
    by one; whether an empty node list is acceptable is up to the caller.

    @param {Any} parsed - Object produced by `repair` (anything else counts as {}).
    @returns {Roadmap} Roadmap with every field populated and no id.
    """
    raw: Mapping[str, Any] = parsed if isinstance(parsed, Mapping) else {}

    nodes = resolve_nodes(raw)
    edges = resolve_edges(raw.get("edges"), nodes)

    return Roadmap(
        title=_text(raw.get("title"), DEFAULT_TITLE),
        description=_text(raw.get("description"), ""),
        nodes=nodes,
        edges=edges,
        estimated_total_duration=_text(raw.get("estimatedTotalDuration"), ""),
        difficulty=_text(raw.get("difficulty"), DEFAULT_DIFFICULTY),
        category=_text(raw.get("category"), DEFAULT_CATEGORY),
    )


def resolve_nodes(raw: Mapping[str, Any]) -> List[RoadmapStep]:
    """
    `nodes` wins over `steps`; steps are always typed as tasks.

    @param {Mapping[str, Any]} raw - Parsed payload.
    @returns {List[RoadmapStep]} Steps in payload order.
    """
    if isinstance(raw.get("nodes"), list):
        return _build_steps(raw["nodes"], keep_type=True)
    if isinstance(raw.get("steps"), list):
        return _build_steps(raw["steps"], keep_type=False)
    return []


def resolve_edges(supplied: Any, nodes: List[RoadmapStep]) -> List[RoadmapLink]:
    """
    Pass supplied edges through, or chain the nodes when there are none.

    @param {Any} supplied - Raw `edges` value.
    @param {List[RoadmapStep]} nodes - Resolved steps.
    @returns {List[RoadmapLink]} Links in order.
    """
    links: List[RoadmapLink] = []
    if isinstance(supplied, list):
        for entry in supplied:
            link = _build_link(entry)
            if link is not None:
                links.append(link)
    if links:
        return links
    return sequential_links(nodes)


def sequential_links(nodes: List[RoadmapStep]) -> List[RoadmapLink]:
    """
    @param {List[RoadmapStep]} nodes - Ordered steps.
    @returns {List[RoadmapLink]} node[i] -> node[i+1] links labelled "Then".
    """
    return [
        RoadmapLink(source=nodes[idx].id, target=nodes[idx + 1].id, label=DEFAULT_LINK_LABEL)
        for idx in range(len(nodes) - 1)
    ]


def _build_steps(entries: List[Any], keep_type: bool) -> List[RoadmapStep]:
    steps: List[RoadmapStep] = []
    for idx, entry in enumerate(entries):
        fallback_id = f"step_{idx + 1}"
        if isinstance(entry, str):
            steps.append(RoadmapStep(id=fallback_id, title=entry))
        elif isinstance(entry, Mapping):
            steps.append(
                RoadmapStep(
                    id=_identifier(entry.get("id")) or fallback_id,
                    title=_string(entry.get("title")),
                    description=_string(entry.get("description")),
                    duration=_string(entry.get("duration")),
                    type=_step_type(entry.get("type")) if keep_type else StepType.TASK,
                    resources=_resources(entry.get("resources")),
                )
            )
    return steps


def _build_link(entry: Any) -> Optional[RoadmapLink]:
    if not isinstance(entry, Mapping):
        return None
    source = _identifier(entry.get("source"))
    target = _identifier(entry.get("target"))
    if not source or not target:
        return None
    return RoadmapLink(source=source, target=target, label=_text(entry.get("label"), DEFAULT_LINK_LABEL))


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _identifier(value: Any) -> Optional[str]:
    # models sometimes emit numeric ids
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return text or None
    return None


def _step_type(value: Any) -> StepType:
    if isinstance(value, str):
        return _STEP_TYPES.get(value.strip().lower(), StepType.TASK)
    return StepType.TASK


def _resources(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
