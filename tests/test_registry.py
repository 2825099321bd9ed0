"""
Tests for link registries
"""

import json

import pytest

from grid_diagrams import (
    FileSystemLinkRegistry,
    GridDiagram,
    InvalidInputError,
    LinkNotFoundError,
    MemoryLinkRegistry,
    RegistryUnavailableError,
    load_diagram,
)

LINKS = {
    "unknot": [[0, 1], [1, 0]],
    "trefoil": [[0, 1, 2, 3, 4], [2, 3, 4, 0, 1]],
}


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "grids.json"
    path.write_text(json.dumps(LINKS))
    return path


class TestMemoryLinkRegistry:
    def test_lookup(self):
        registry = MemoryLinkRegistry(LINKS)
        assert registry.lookup("unknot") == ([0, 1], [1, 0])
        assert registry.names() == ["trefoil", "unknot"]
        assert "trefoil" in registry

    def test_missing(self):
        with pytest.raises(LinkNotFoundError) as info:
            MemoryLinkRegistry().lookup("figure_eight")
        assert info.value.name == "figure_eight"
        assert "figure_eight" in str(info.value)

    def test_missing_is_key_error(self):
        with pytest.raises(KeyError):
            MemoryLinkRegistry().lookup("figure_eight")

    def test_store_savable(self, trefoil):
        registry = MemoryLinkRegistry()
        registry.store("trefoil", trefoil.to_savable())
        assert load_diagram("trefoil", registry) == trefoil

    def test_store_bad_shape(self):
        with pytest.raises(InvalidInputError):
            MemoryLinkRegistry().store("bad", [[0, 1, 2]])

    @pytest.mark.parametrize("savable", [[[0, 1], [1]], [[0, 1, 2], [1, 0]]])
    def test_store_ragged(self, savable):
        with pytest.raises(InvalidInputError):
            MemoryLinkRegistry().store("bad", savable)

    def test_float_entry_rejected_on_load(self):
        registry = MemoryLinkRegistry({"unknot": [[0.0, 1.9], [1.0, 0.2]]})
        with pytest.raises(RegistryUnavailableError):
            load_diagram("unknot", registry)


class TestFileSystemLinkRegistry:
    def test_lookup(self, registry_file):
        registry = FileSystemLinkRegistry(str(registry_file))
        assert registry.lookup("trefoil") == ([0, 1, 2, 3, 4], [2, 3, 4, 0, 1])
        assert registry.names() == ["trefoil", "unknot"]

    def test_directory_path(self, registry_file):
        registry = FileSystemLinkRegistry(str(registry_file.parent))
        assert registry.path == registry_file

    def test_env_default(self, registry_file, monkeypatch):
        monkeypatch.setenv("GRID_DIAGRAMS_REGISTRY", str(registry_file))
        assert FileSystemLinkRegistry().lookup("unknot") == ([0, 1], [1, 0])

    def test_missing_name(self, registry_file):
        with pytest.raises(LinkNotFoundError):
            FileSystemLinkRegistry(str(registry_file)).lookup("figure_eight")

    def test_missing_file(self, tmp_path):
        registry = FileSystemLinkRegistry(str(tmp_path / "absent.json"))
        with pytest.raises(RegistryUnavailableError):
            registry.lookup("unknot")

    def test_corrupted_json(self, tmp_path):
        path = tmp_path / "grids.json"
        path.write_text("{not json")
        with pytest.raises(RegistryUnavailableError):
            FileSystemLinkRegistry(str(path)).lookup("unknot")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "grids.json"
        path.write_text("[1, 2]")
        with pytest.raises(RegistryUnavailableError):
            FileSystemLinkRegistry(str(path)).names()

    def test_malformed_entry(self, tmp_path):
        path = tmp_path / "grids.json"
        path.write_text(json.dumps({"unknot": [0, 1, 2]}))
        with pytest.raises(RegistryUnavailableError):
            FileSystemLinkRegistry(str(path)).lookup("unknot")

    @pytest.mark.parametrize("entry", [
        [[0, 1.9], [1, 0.2]],
        [[False, True], [True, False]],
        [[0, "1"], [1, 0]],
    ])
    def test_non_integer_entry(self, tmp_path, entry):
        path = tmp_path / "grids.json"
        path.write_text(json.dumps({"unknot": entry}))
        registry = FileSystemLinkRegistry(str(path))
        with pytest.raises(RegistryUnavailableError):
            registry.lookup("unknot")
        with pytest.raises(RegistryUnavailableError):
            load_diagram("unknot", registry)

    def test_store_round_trip(self, tmp_path, trefoil):
        registry = FileSystemLinkRegistry(str(tmp_path / "new" / "grids.json"))
        registry.store("trefoil", trefoil.to_savable())
        registry.store("unknot", [[0, 1], [1, 0]])
        assert registry.names() == ["trefoil", "unknot"]
        assert load_diagram("trefoil", registry) == trefoil


class TestLoadDiagram:
    def test_from_registry(self, registry_file, trefoil):
        registry = FileSystemLinkRegistry(str(registry_file))
        assert GridDiagram.from_registry("trefoil", registry) == trefoil

    def test_invalid_grid_is_registry_fault(self):
        registry = MemoryLinkRegistry({"broken": [[0, 1], [0, 1]]})
        with pytest.raises(RegistryUnavailableError) as info:
            load_diagram("broken", registry)
        assert isinstance(info.value.__cause__, InvalidInputError)

    def test_missing_propagates(self):
        with pytest.raises(LinkNotFoundError):
            GridDiagram.from_registry("trefoil", MemoryLinkRegistry())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
