import pytest
from structlog.testing import capture_logs

from rendezvous import FNV1a64Provider
from rendezvous.coordinator import Node, NodeRegistry


@pytest.fixture
def registry():
    return NodeRegistry(FNV1a64Provider())


class TestUpsert:

    def test_insert_computes_name_hash(self, registry):
        assert registry.upsert("a", 2.0) is True
        assert registry.get("a") == Node(name="a", name_hash=FNV1a64Provider().hash("a"), weight=2.0)

    def test_none_means_default_weight(self):
        registry = NodeRegistry(FNV1a64Provider(), default_weight=3.0)
        registry.upsert("a", None)
        assert registry.get("a").weight == 3.0

    def test_update_replaces_weight_only(self, registry):
        registry.upsert("b", 1.0)
        original = registry.get("b")

        assert registry.upsert("b", 1.5) is False
        updated = registry.get("b")
        assert updated.weight == 1.5
        assert updated.name_hash == original.name_hash
        assert len(registry) == 1


class TestDelete:

    def test_delete_present(self, registry):
        registry.upsert("a", 1.0)
        assert registry.delete("a") is True
        assert "a" not in registry
        assert len(registry) == 0

    def test_delete_absent_is_noop(self, registry):
        registry.upsert("a", 1.0)
        assert registry.delete("missing") is False
        assert len(registry) == 1


class TestEnumeration:

    def test_snapshot_sorted_by_name(self, registry):
        for name in ("d", "c", "e", "b", "a"):
            registry.upsert(name, 1.0)
        assert [n.name for n in registry.snapshot()] == ["a", "b", "c", "d", "e"]

    def test_snapshot_is_detached(self, registry):
        registry.upsert("a", 1.0)
        snapshot = registry.snapshot()
        registry.upsert("b", 1.0)
        assert [n.name for n in snapshot] == ["a"]

    def test_scan_holds_read_lock(self, registry):
        registry.upsert("a", 1.0)
        with registry.scan() as nodes:
            assert [n.name for n in nodes] == ["a"]
            assert registry._lock.readers == 1
        assert registry._lock.readers == 0


class TestLogging:

    def test_membership_changes_are_logged(self, registry):
        with capture_logs() as logs:
            registry.upsert("a", 1.0)
            registry.upsert("a", 2.0)
            registry.delete("a")
            registry.delete("a")

        assert [entry["event"] for entry in logs] == ["node_added", "node_weight_updated", "node_removed"]
        assert all(entry["log_level"] == "debug" for entry in logs)
        assert logs[1]["weight"] == 2.0


class TestOnChange:

    def test_reports_op_and_count_inside_write_lock(self):
        calls = []
        registry = None

        def on_change(op, node_count):
            calls.append((op, node_count, registry._lock.write_held))

        registry = NodeRegistry(FNV1a64Provider(), on_change=on_change)
        registry.upsert("a", 1.0)
        registry.upsert("b", 1.0)
        registry.upsert("a", 2.0)
        registry.delete("a")
        registry.delete("missing")

        assert calls == [
            ("add", 1, True),
            ("add", 2, True),
            ("update", 2, True),
            ("remove", 1, True),
        ]
