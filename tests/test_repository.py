"""
Tests du dépôt de fonctions de transfert sauvegardées
"""

import json

import pytest

from stabilitylab.core.repository import (
    InMemoryFunctionRepository,
    JsonFunctionRepository,
    SavedFunction,
)

FIRST = SavedFunction("(1) / (s^2 + 3*s + 2)", "1", "1, 3, 2")
SECOND = SavedFunction("retard", "1, -1", "1, 1")


@pytest.fixture(params=["memory", "json"])
def repository(request, tmp_path):
    if request.param == "memory":
        return InMemoryFunctionRepository()
    return JsonFunctionRepository(str(tmp_path / "saved.json"))


class TestRepositoryContract:

    def test_starts_empty(self, repository):
        assert repository.list() == []

    def test_save_and_load(self, repository):
        assert repository.save(FIRST) is True
        assert repository.load(FIRST.name) == FIRST

    def test_list_keeps_insertion_order(self, repository):
        repository.save(SECOND)
        repository.save(FIRST)
        assert [entry.name for entry in repository.list()] == [SECOND.name, FIRST.name]

    def test_duplicate_name_is_ignored(self, repository):
        repository.save(FIRST)
        assert repository.save(SavedFunction(FIRST.name, "2", "1, 1")) is False
        assert repository.load(FIRST.name) == FIRST
        assert len(repository.list()) == 1

    def test_unknown_name(self, repository):
        with pytest.raises(KeyError):
            repository.load("inconnue")

    def test_delete(self, repository):
        repository.save(FIRST)
        assert repository.delete(FIRST.name) is True
        assert repository.delete(FIRST.name) is False
        assert repository.list() == []


class TestJsonRepository:

    def test_persists_between_instances(self, tmp_path):
        path = str(tmp_path / "saved.json")
        JsonFunctionRepository(path).save(FIRST)
        JsonFunctionRepository(path).save(SECOND)

        reloaded = JsonFunctionRepository(path)
        assert reloaded.list() == [FIRST, SECOND]

    def test_file_format(self, tmp_path):
        path = tmp_path / "saved.json"
        JsonFunctionRepository(str(path)).save(SECOND)
        assert json.loads(path.read_text(encoding="utf-8")) == [
            {"name": "retard", "numerator": "1, -1", "denominator": "1, 1"}
        ]

    def test_delete_is_persisted(self, tmp_path):
        path = str(tmp_path / "saved.json")
        repository = JsonFunctionRepository(path)
        repository.save(FIRST)
        repository.delete(FIRST.name)
        assert JsonFunctionRepository(path).list() == []

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "saved.json"
        JsonFunctionRepository(str(path)).save(FIRST)
        assert path.exists()

    def test_missing_file_is_not_created_on_read(self, tmp_path):
        path = tmp_path / "saved.json"
        JsonFunctionRepository(str(path))
        assert not path.exists()

    @pytest.mark.parametrize("content", [
        '[{"name": "a", "numerator": "1"}]',
        '[["a", "1", "1, 1"]]',
        '{"name": "a", "numerator": "1", "denominator": "1, 1"}',
        'pas du json',
    ])
    def test_malformed_file_raises_value_error(self, tmp_path, content):
        path = tmp_path / "saved.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError):
            JsonFunctionRepository(str(path))

    def test_write_failure_propagates(self, tmp_path):
        blocker = tmp_path / "fichier"
        blocker.write_text("", encoding="utf-8")
        repository = JsonFunctionRepository(str(blocker / "saved.json"))
        with pytest.raises(OSError):
            repository.save(FIRST)
