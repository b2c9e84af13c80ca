from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Opt-in typed views over ZenHub envelopes. The client never applies these
# implicitly; call Model.model_validate(result) where a typed value is wanted.


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Estimate(_Lenient):
    value: Optional[float] = None


class PipelineRef(_Lenient):
    name: Optional[str] = None
    pipeline_id: Optional[str] = None
    workspace_id: Optional[str] = None


class BoardIssue(_Lenient):
    issue_number: int
    estimate: Optional[Estimate] = None
    position: Optional[int] = None
    is_epic: bool = False


class Pipeline(_Lenient):
    id: str
    name: Optional[str] = None
    issues: List[BoardIssue] = Field(default_factory=list)

    @property
    def total_estimate(self) -> float:
        return sum(
            i.estimate.value for i in self.issues if i.estimate and i.estimate.value
        )


class IssueData(_Lenient):
    estimate: Optional[Estimate] = None
    plus_ones: List[Dict[str, Any]] = Field(default_factory=list)
    pipeline: Optional[PipelineRef] = None
    is_epic: bool = False


class IssueEvent(_Lenient):
    user_id: Optional[int] = None
    type: str
    created_at: Optional[str] = None
    from_estimate: Optional[Estimate] = None
    to_estimate: Optional[Estimate] = None
    from_pipeline: Optional[PipelineRef] = None
    to_pipeline: Optional[PipelineRef] = None


class IssueRef(_Lenient):
    repo_id: int
    issue_number: int


class EpicIssue(_Lenient):
    issue_number: int
    repo_id: int
    issue_url: Optional[str] = None


class EpicList(_Lenient):
    epic_issues: List[EpicIssue] = Field(default_factory=list)


class EpicData(_Lenient):
    total_epic_estimates: Optional[Estimate] = None
    estimate: Optional[Estimate] = None
    pipeline: Optional[PipelineRef] = None
    issues: List[Dict[str, Any]] = Field(default_factory=list)


def parse_board(pipelines: Optional[Iterable[Dict[str, Any]]]) -> List[Pipeline]:
    """Validate the `get_board` result into Pipeline models."""
    return [Pipeline.model_validate(p) for p in pipelines or []]


def _issue_refs(
    issues: Optional[Iterable[IssueRef | Dict[str, Any]]],
) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for issue in issues or []:
        if isinstance(issue, IssueRef):
            out.append(issue.model_dump())
        else:
            out.append(dict(issue))
    return out


def epic_update_payload(
    *,
    add: Optional[Iterable[IssueRef | Dict[str, Any]]] = None,
    remove: Optional[Iterable[IssueRef | Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Body for `add_remove_issues_to_epic`; empty sides are omitted."""
    payload: Dict[str, Any] = {}
    add_refs = _issue_refs(add)
    remove_refs = _issue_refs(remove)
    if add_refs:
        payload["add_issues"] = add_refs
    if remove_refs:
        payload["remove_issues"] = remove_refs
    return payload


def convert_to_epic_payload(
    issues: Optional[Iterable[IssueRef | Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {"issues": _issue_refs(issues)}


def estimate_payload(value: float) -> Dict[str, Any]:
    return {"estimate": value}


__all__ = [
    "Estimate",
    "PipelineRef",
    "BoardIssue",
    "Pipeline",
    "IssueData",
    "IssueEvent",
    "IssueRef",
    "EpicIssue",
    "EpicList",
    "EpicData",
    "parse_board",
    "epic_update_payload",
    "convert_to_epic_payload",
    "estimate_payload",
]
