from zenhub_client.models import (
    EpicData,
    EpicList,
    IssueData,
    IssueEvent,
    IssueRef,
    convert_to_epic_payload,
    epic_update_payload,
    estimate_payload,
    parse_board,
)


def test_parse_board():
    pipelines = [
        {
            "id": "p1",
            "name": "Backlog",
            "issues": [
                {"issue_number": 1, "estimate": {"value": 3}, "position": 0},
                {"issue_number": 2, "is_epic": True, "position": 1},
                {"issue_number": 3, "estimate": {"value": 5}},
            ],
        }
    ]

    board = parse_board(pipelines)

    assert len(board) == 1
    assert board[0].name == "Backlog"
    assert [i.issue_number for i in board[0].issues] == [1, 2, 3]
    assert board[0].issues[1].is_epic is True
    assert board[0].total_estimate == 8


def test_parse_board_none_is_empty():
    assert parse_board(None) == []


def test_issue_data_ignores_unknown_fields():
    issue = IssueData.model_validate(
        {
            "estimate": {"value": 8},
            "plus_ones": [{"created_at": "2015-12-11T18:43:22.296Z"}],
            "pipeline": {"name": "QA", "pipeline_id": "5d0a7a9741fd098f6b7f58a7"},
            "is_epic": True,
            "extra": "ignored",
        }
    )

    assert issue.estimate.value == 8
    assert issue.pipeline.name == "QA"
    assert issue.is_epic is True


def test_issue_event():
    event = IssueEvent.model_validate(
        {
            "user_id": 16717,
            "type": "estimateIssue",
            "created_at": "2015-12-11T19:43:22.296Z",
            "from_estimate": {"value": 8},
        }
    )

    assert event.type == "estimateIssue"
    assert event.from_estimate.value == 8
    assert event.to_estimate is None


def test_epic_list_and_data():
    epics = EpicList.model_validate(
        {"epic_issues": [{"issue_number": 3953, "repo_id": 1099029}]}
    )
    data = EpicData.model_validate(
        {"total_epic_estimates": {"value": 60}, "issues": [{"issue_number": 1}]}
    )

    assert epics.epic_issues[0].repo_id == 1099029
    assert data.total_epic_estimates.value == 60
    assert data.estimate is None


def test_epic_update_payload():
    payload = epic_update_payload(
        add=[IssueRef(repo_id=1, issue_number=2)],
        remove=[{"repo_id": 1, "issue_number": 3}],
    )

    assert payload == {
        "add_issues": [{"repo_id": 1, "issue_number": 2}],
        "remove_issues": [{"repo_id": 1, "issue_number": 3}],
    }


def test_epic_update_payload_omits_empty_sides():
    assert epic_update_payload(add=[IssueRef(repo_id=1, issue_number=2)]) == {
        "add_issues": [{"repo_id": 1, "issue_number": 2}]
    }


def test_convert_and_estimate_payloads():
    assert convert_to_epic_payload() == {"issues": []}
    assert convert_to_epic_payload([IssueRef(repo_id=4, issue_number=5)]) == {
        "issues": [{"repo_id": 4, "issue_number": 5}]
    }
    assert estimate_payload(15) == {"estimate": 15}
