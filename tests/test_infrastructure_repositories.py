"""
Tests for infrastructure repository implementations.

These tests verify that the Supabase repository implementation issues the
expected queries and can be used with dependency injection. The Supabase
client is mocked; no database is required.
"""
import pytest
from unittest.mock import MagicMock, Mock, patch

from engine.settings import Settings

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


def _client_returning(data):
    """Mock client whose every query chain ends in `.execute().data == data`."""
    client = MagicMock()
    table = client.table.return_value
    for chain_end in (
        table.upsert.return_value,
        table.select.return_value.eq.return_value.single.return_value,
        table.select.return_value.eq.return_value.order.return_value,
        table.delete.return_value.eq.return_value,
    ):
        chain_end.execute.return_value = Mock(data=data)
    return client


class TestRepositoryImports:
    """Test that the repository can be imported."""

    def test_import_workout_repository(self):
        """SupabaseWorkoutRepository should be importable."""
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        assert SupabaseWorkoutRepository is not None

    def test_import_from_infrastructure_package(self):
        """Repository and wiring should be importable from infrastructure package."""
        from infrastructure import SupabaseWorkoutRepository, get_workout_repository
        assert SupabaseWorkoutRepository is not None
        assert get_workout_repository is not None


class TestSupabaseWorkoutRepository:
    """Test SupabaseWorkoutRepository queries."""

    def test_instantiation(self):
        """Repository should accept client via constructor."""
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        mock_client = Mock()
        repo = SupabaseWorkoutRepository(mock_client)
        assert repo._client is mock_client
        assert repo._table == "workouts"

    def test_has_required_methods(self):
        """Repository should implement every WorkoutRepository method."""
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        for method in ("save", "get", "list_by_date", "delete"):
            assert hasattr(SupabaseWorkoutRepository, method), f"Missing method: {method}"

    def test_save_upserts_by_id(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        client = _client_returning([{"id": "w1", "completed": True}])
        repo = SupabaseWorkoutRepository(client, table="gym_workouts")

        saved = repo.save({"id": "w1", "completed": True})

        assert saved == {"id": "w1", "completed": True}
        client.table.assert_called_with("gym_workouts")
        upserted, = client.table.return_value.upsert.call_args.args
        assert upserted["id"] == "w1"
        assert "updated_at" in upserted
        assert client.table.return_value.upsert.call_args.kwargs == {"on_conflict": "id"}

    def test_save_keeps_given_updated_at(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        client = _client_returning([{"id": "w1"}])
        SupabaseWorkoutRepository(client).save({"id": "w1", "updated_at": "2026-10-16T10:00:00+00:00"})
        upserted, = client.table.return_value.upsert.call_args.args
        assert upserted["updated_at"] == "2026-10-16T10:00:00+00:00"

    def test_save_failure_returns_none(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        client = MagicMock()
        client.table.side_effect = Exception("new row violates row-level security policy")
        assert SupabaseWorkoutRepository(client).save({"id": "w1"}) is None

    def test_get(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        client = _client_returning({"id": "w1"})

        assert SupabaseWorkoutRepository(client).get("w1") == {"id": "w1"}
        client.table.return_value.select.return_value.eq.assert_called_with("id", "w1")

    def test_get_missing_returns_none(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        client = MagicMock()
        client.table.return_value.select.return_value.eq.return_value.single.return_value.execute.side_effect = (
            Exception("JSON object requested, multiple (or no) rows returned")
        )
        assert SupabaseWorkoutRepository(client).get("missing") is None

    def test_list_by_date(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        client = _client_returning([{"id": "w1"}, {"id": "w2"}])

        rows = SupabaseWorkoutRepository(client).list_by_date("2026-10-16")

        assert [r["id"] for r in rows] == ["w1", "w2"]
        client.table.return_value.select.return_value.eq.assert_called_with("date", "2026-10-16")
        client.table.return_value.select.return_value.eq.return_value.order.assert_called_with("created_at")

    def test_list_by_date_empty(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        assert SupabaseWorkoutRepository(_client_returning(None)).list_by_date("2026-10-16") == []

    def test_delete(self):
        from infrastructure.db.workout_repository import SupabaseWorkoutRepository
        assert SupabaseWorkoutRepository(_client_returning([{"id": "w1"}])).delete("w1") is True
        assert SupabaseWorkoutRepository(_client_returning([])).delete("w1") is False


class TestRepositoryWiring:
    """Test client and repository construction from settings."""

    def test_no_credentials_no_client(self):
        from infrastructure.db.client import get_supabase_client, get_workout_repository
        settings = Settings(supabase_url=None, supabase_anon_key=None, supabase_service_role_key=None, _env_file=None)
        assert get_supabase_client(settings) is None
        assert get_workout_repository(settings) is None

    def test_repository_uses_configured_table(self):
        from infrastructure.db.client import get_workout_repository
        settings = Settings(
            supabase_url="https://example.supabase.co",
            supabase_service_role_key="service",
            workouts_table="gym_workouts",
            _env_file=None,
        )
        with patch("infrastructure.db.client.create_client") as create_client:
            repo = get_workout_repository(settings)

        create_client.assert_called_once_with("https://example.supabase.co", "service")
        assert repo._client is create_client.return_value
        assert repo._table == "gym_workouts"


class TestFakeWorkoutRepository:
    """The fake used by unit tests behaves like the Supabase repository."""

    def test_roundtrip(self):
        from tests.fakes import create_workout_repo, make_workout_row
        repo = create_workout_repo([make_workout_row("w1"), make_workout_row("w2", date="2026-10-17")])

        assert repo.get("w1")["id"] == "w1"
        assert [r["id"] for r in repo.list_by_date("2026-10-16")] == ["w1"]
        assert repo.delete("w1") is True
        assert repo.delete("w1") is False
        assert repo.get("w1") is None

    def test_save_failure(self):
        from tests.fakes import FakeWorkoutRepository
        repo = FakeWorkoutRepository()
        repo.fail_saves = True
        assert repo.save({"id": "w1"}) is None
        assert repo.save_calls == 1
