"""Snippet versioning tests."""

from unittest.mock import patch

import pytest
from fastapi import HTTPException

from src.models.snippet import Snippet
from src.models.snippet_version import SnippetVersion
from src.models.user import User
from src.schemas.snippet import SnippetCreate
from src.services.snippet_service import SnippetService
from src.services.version_service import VersionService


def _versions(client, headers, snippet_id):
    response = client.get(f"/api/v1/snippets/{snippet_id}/versions", headers=headers)
    assert response.status_code == 200
    return response.json()


def test_each_save_appends_one_version(client, auth_headers, create_snippet):
    """Test every save adds exactly one version numbered max + 1."""
    snippet = create_snippet(code="v1")

    for code in ["v2", "v3", "v4"]:
        client.put(f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": code})

    versions = _versions(client, auth_headers, snippet["id"])
    assert [v["version_number"] for v in versions] == [4, 3, 2, 1]
    assert [v["code"] for v in versions] == ["v4", "v3", "v2", "v1"]
    assert versions[0]["comment"] == "Updated snippet"
    assert versions[-1]["comment"] == "Initial version"


def test_metadata_only_save_still_versions(client, auth_headers, create_snippet):
    """Test that a save without code changes still records the current code."""
    snippet = create_snippet(code="same")

    client.put(
        f"/api/v1/snippets/{snippet['id']}",
        headers=auth_headers,
        json={"title": "New title", "version_comment": "Renamed"},
    )

    versions = _versions(client, auth_headers, snippet["id"])
    assert len(versions) == 2
    assert versions[0]["code"] == "same"
    assert versions[0]["comment"] == "Renamed"


def test_restore_version(client, auth_headers, create_snippet):
    """Test restoring version K copies its code and appends a new version."""
    snippet = create_snippet(code="original")
    client.put(f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": "broken"})

    first = _versions(client, auth_headers, snippet["id"])[-1]
    response = client.post(
        f"/api/v1/snippets/{snippet['id']}/versions/{first['id']}/restore", headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["code"] == "original"

    versions = _versions(client, auth_headers, snippet["id"])
    assert [v["version_number"] for v in versions] == [3, 2, 1]
    assert versions[0]["code"] == "original"
    assert versions[0]["comment"] == "Restored from version 1"
    # Older versions are untouched
    assert versions[1]["code"] == "broken"


def test_restore_version_not_owner(client, auth_headers, other_auth_headers, create_snippet):
    """Test that only the owner can restore."""
    snippet = create_snippet(is_public=True)
    version = _versions(client, auth_headers, snippet["id"])[0]

    response = client.post(
        f"/api/v1/snippets/{snippet['id']}/versions/{version['id']}/restore",
        headers=other_auth_headers,
    )
    assert response.status_code == 403


def test_restore_version_from_other_snippet(client, auth_headers, create_snippet):
    """Test that a version id must belong to the snippet in the path."""
    first = create_snippet(title="First")
    second = create_snippet(title="Second")
    foreign = _versions(client, auth_headers, second["id"])[0]

    response = client.post(
        f"/api/v1/snippets/{first['id']}/versions/{foreign['id']}/restore", headers=auth_headers
    )
    assert response.status_code == 404


def test_diff_version(client, auth_headers, create_snippet):
    """Test diffing an old version against the current code."""
    snippet = create_snippet(code="a\nb\nc\n")
    client.put(
        f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": "a\nB\nc\nd\n"}
    )
    first = _versions(client, auth_headers, snippet["id"])[-1]

    response = client.get(
        f"/api/v1/snippets/{snippet['id']}/versions/{first['id']}/diff", headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["version_number"] == 1
    assert data["identical"] is False
    assert data["added"] == 2
    assert data["removed"] == 1
    assert "--- version 1" in data["diff"]
    assert "+++ current" in data["diff"]
    assert "-b" in data["diff"].splitlines()
    assert "+B" in data["diff"].splitlines()


def test_diff_identical_version(client, auth_headers, create_snippet):
    """Test diffing the latest version gives an empty diff."""
    snippet = create_snippet()
    latest = _versions(client, auth_headers, snippet["id"])[0]

    response = client.get(
        f"/api/v1/snippets/{snippet['id']}/versions/{latest['id']}/diff", headers=auth_headers
    )
    data = response.json()
    assert data["identical"] is True
    assert data["diff"] == ""
    assert data["added"] == 0
    assert data["removed"] == 0


def test_diff_trailing_newline_added(client, auth_headers, create_snippet):
    """Test that only adding a trailing newline is reported as a change."""
    snippet = create_snippet(code="print(1)")
    client.put(
        f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": "print(1)\n"}
    )
    first = _versions(client, auth_headers, snippet["id"])[-1]

    response = client.get(
        f"/api/v1/snippets/{snippet['id']}/versions/{first['id']}/diff", headers=auth_headers
    )
    data = response.json()
    assert data["identical"] is False
    assert data["diff"] != ""
    assert data["added"] == 1
    assert data["removed"] == 1
    assert "\\ No newline at end of file" in data["diff"].splitlines()


def test_diff_trailing_newline_removed(client, auth_headers, create_snippet):
    """Test that dropping the trailing newline is reported as a change."""
    snippet = create_snippet(code="x\n")
    client.put(f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": "x"})
    first = _versions(client, auth_headers, snippet["id"])[-1]

    response = client.get(
        f"/api/v1/snippets/{snippet['id']}/versions/{first['id']}/diff", headers=auth_headers
    )
    data = response.json()
    assert data["identical"] is False
    assert data["added"] == 1
    assert data["removed"] == 1
    assert data["diff"].splitlines()[-1] == "\\ No newline at end of file"


def test_diff_line_ending_change(client, auth_headers, create_snippet):
    """Test that switching LF to CRLF shows up in the diff."""
    snippet = create_snippet(code="a\nb\n")
    client.put(
        f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": "a\r\nb\n"}
    )
    first = _versions(client, auth_headers, snippet["id"])[-1]

    response = client.get(
        f"/api/v1/snippets/{snippet['id']}/versions/{first['id']}/diff", headers=auth_headers
    )
    data = response.json()
    assert data["identical"] is False
    assert data["added"] == 1
    assert data["removed"] == 1


def test_versions_hidden_for_private_snippet(client, other_auth_headers, create_snippet):
    """Test version history follows snippet visibility."""
    snippet = create_snippet(is_public=False)

    response = client.get(f"/api/v1/snippets/{snippet['id']}/versions", headers=other_auth_headers)
    assert response.status_code == 404


def test_get_single_version(client, auth_headers, create_snippet):
    """Test reading one version."""
    snippet = create_snippet(code="first")
    version = _versions(client, auth_headers, snippet["id"])[0]

    response = client.get(
        f"/api/v1/snippets/{snippet['id']}/versions/{version['id']}", headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["code"] == "first"


def test_manual_checkpoint(client, auth_headers, create_snippet):
    """Test recording a checkpoint with a comment."""
    snippet = create_snippet(code="stable")

    response = client.post(
        f"/api/v1/snippets/{snippet['id']}/versions",
        headers=auth_headers,
        json={"comment": "Before refactor"},
    )
    assert response.status_code == 201
    assert response.json()["version_number"] == 2
    assert response.json()["code"] == "stable"
    assert response.json()["comment"] == "Before refactor"


def test_recent_changes(client, auth_headers, create_snippet):
    """Test the dashboard feed lists my newest versions with their snippets."""
    snippet = create_snippet(title="Busy")
    for i in range(6):
        client.put(
            f"/api/v1/snippets/{snippet['id']}", headers=auth_headers, json={"code": f"v{i}"}
        )

    response = client.get("/api/v1/versions/recent", headers=auth_headers)
    assert response.status_code == 200
    changes = response.json()
    assert len(changes) == 5
    assert changes[0]["version_number"] == 7
    assert changes[0]["snippet"]["title"] == "Busy"

    response = client.get("/api/v1/versions/recent?limit=2", headers=auth_headers)
    assert len(response.json()) == 2


# --- Service-level tests ---


@pytest.fixture
def owner(db):
    """Create a user directly in the database."""
    user = User(email="owner@example.com", full_name="Owner", password_hash="fake")
    db.add(user)
    db.commit()
    return user


def test_next_version_number(db, owner):
    """Test numbering starts at 1 and follows the maximum."""
    snippet = Snippet(user_id=owner.id, title="t", code="c", language="python")
    db.add(snippet)
    db.commit()

    service = VersionService(db)
    assert service.next_version_number(snippet.id) == 1

    db.add(SnippetVersion(snippet_id=snippet.id, user_id=owner.id, version_number=7, code="c"))
    db.commit()
    assert service.next_version_number(snippet.id) == 8


def test_create_version_retries_on_collision(db, owner):
    """Test a stale version number is detected and the insert is retried."""
    snippet = SnippetService(db).create_snippet(
        SnippetCreate(title="t", code="c", language="python"), owner
    )
    service = VersionService(db)

    # The first computation returns a number a concurrent writer already took
    with patch.object(service, "next_version_number", side_effect=[1, 2]):
        version = service.create_version(snippet, "c2", owner.id, "racing")
    db.commit()

    assert version.version_number == 2
    numbers = [
        v.version_number
        for v in db.query(SnippetVersion).filter(SnippetVersion.snippet_id == snippet.id)
    ]
    assert sorted(numbers) == [1, 2]


def test_create_version_gives_up_after_retries(db, owner):
    """Test persistent collisions surface as a conflict."""
    snippet = SnippetService(db).create_snippet(
        SnippetCreate(title="t", code="c", language="python"), owner
    )
    service = VersionService(db)

    with patch.object(service, "next_version_number", return_value=1):
        with pytest.raises(HTTPException) as exc_info:
            service.create_version(snippet, "c2", owner.id)

    assert exc_info.value.status_code == 409
    db.rollback()
    assert db.query(SnippetVersion).count() == 1
