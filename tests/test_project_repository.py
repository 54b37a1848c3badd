"""Tests for ProjectRepository: pure CRUD on project dict lists."""

import copy

import pytest

from services.repositories import ProjectRepository


def record(pid, updated, name=None):
    return {"id": pid, "name": name or pid, "createdAt": updated, "updatedAt": updated, "state": {}}


@pytest.fixture
def projects():
    return [
        record("a", "2024-01-01T00:00:00.000Z"),
        record("b", "2024-03-01T00:00:00.000Z"),
        record("c", "2024-02-01T00:00:00.000Z"),
    ]


class TestListAll:
    def test_newest_first(self, projects):
        assert [p["id"] for p in ProjectRepository.list_all(projects)] == ["b", "c", "a"]

    def test_skips_invalid_entries(self, projects):
        messy = projects + [{"name": "no id"}, "junk", None]
        assert len(ProjectRepository.list_all(messy)) == 3

    def test_non_list(self):
        assert ProjectRepository.list_all({"projects": []}) == []


class TestCrud:
    def test_get_by_id(self, projects):
        assert ProjectRepository.get_by_id(projects, "c")["updatedAt"] == "2024-02-01T00:00:00.000Z"
        assert ProjectRepository.get_by_id(projects, "zzz") is None

    def test_add(self, projects):
        updated = ProjectRepository.add(projects, record("d", "2024-04-01T00:00:00.000Z"))
        assert len(updated) == 4
        assert len(projects) == 3

    def test_add_duplicate_rejected(self, projects):
        with pytest.raises(ValueError):
            ProjectRepository.add(projects, record("a", "2024-05-01T00:00:00.000Z"))

    def test_update_name_and_state(self, projects):
        before = copy.deepcopy(projects)
        updated = ProjectRepository.update(
            projects, "a", "2024-06-01T00:00:00.000Z", name="Renamed", state={"unitPrice": 5}
        )
        changed = ProjectRepository.get_by_id(updated, "a")

        assert changed["name"] == "Renamed"
        assert changed["state"] == {"unitPrice": 5}
        assert changed["updatedAt"] == "2024-06-01T00:00:00.000Z"
        assert ProjectRepository.list_all(updated)[0]["id"] == "a"
        assert projects == before

    def test_update_name_only_keeps_state(self, projects):
        projects[0]["state"] = {"quantity": 3}
        updated = ProjectRepository.update(projects, "a", "2024-06-01T00:00:00.000Z", name="X")
        assert ProjectRepository.get_by_id(updated, "a")["state"] == {"quantity": 3}

    def test_update_unknown_id_is_noop(self, projects):
        updated = ProjectRepository.update(projects, "zzz", "2024-06-01T00:00:00.000Z", name="X")
        assert sorted(p["name"] for p in updated) == ["a", "b", "c"]

    def test_delete(self, projects):
        updated = ProjectRepository.delete(projects, "b")
        assert [p["id"] for p in updated] == ["c", "a"]
        assert len(projects) == 3
