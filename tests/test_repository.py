"""
Unit tests for the generic repository.

Tests cover:
- Id allocation and store-assigned ids
- Lookups, listing and deletion
- Parameterised textual queries
- Failures raised as RepositoryError
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker

from errors import RepositoryError
from models import Serveur
from repositories.base import BaseRepository
from repositories.raw_sql import RawSqlRepository
from repositories.serveur import ServeurRepository
from tests.conftest import memory_engine


class TestBaseRepository:
    """Tests for BaseRepository over the serveurs table."""

    @pytest.fixture
    def repository(self, session):
        return ServeurRepository(session)

    @pytest.mark.asyncio
    async def test_allocate_next_id_empty_table(self, repository):
        assert await repository.allocate_next_id() == 1

    @pytest.mark.asyncio
    async def test_allocate_next_id_after_rows(self, repository):
        await repository.save(Serveur(id=7, name="a"))
        assert await repository.allocate_next_id() == 8

    @pytest.mark.asyncio
    async def test_save_assigns_id_above_current_max(self, repository):
        await repository.save(Serveur(id=41, name="preset"))
        max_before = await repository.allocate_next_id() - 1

        saved = await repository.save(Serveur(name="fresh"))

        assert saved.id is not None
        assert saved.id > max_before

    @pytest.mark.asyncio
    async def test_save_keeps_caller_id(self, repository):
        saved = await repository.save(Serveur(id=12, name="explicit"))
        assert saved.id == 12
        assert (await repository.find_by_id(12)).name == "explicit"

    @pytest.mark.asyncio
    async def test_save_duplicate_id_raises(self, repository):
        await repository.save(Serveur(id=3, name="first"))
        with pytest.raises(RepositoryError):
            await repository.save(Serveur(id=3, name="second"))

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, repository):
        assert await repository.find_by_id(999) is None

    @pytest.mark.asyncio
    async def test_find_all_ordered(self, repository):
        await repository.save(Serveur(id=5, name="b"))
        await repository.save(Serveur(id=2, name="a"))

        serveurs = await repository.find_all()

        assert [s.id for s in serveurs] == [2, 5]

    @pytest.mark.asyncio
    async def test_find_all_empty(self, repository):
        assert await repository.find_all() == []

    @pytest.mark.asyncio
    async def test_delete_existing(self, repository):
        saved = await repository.save(Serveur(name="doomed"))

        assert await repository.delete(saved.id) is True
        assert await repository.find_by_id(saved.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, repository):
        assert await repository.delete(123) is False

    @pytest.mark.asyncio
    async def test_update(self, repository):
        saved = await repository.save(Serveur(name="srv"))

        assert await repository.update(saved.id, active=True) is True
        assert await repository.update(999, active=True) is False
        assert (await repository.find_by_id(saved.id)).active is True

    @pytest.mark.asyncio
    async def test_find_by(self, repository):
        await repository.save(Serveur(name="x", game="Minecraft"))
        await repository.save(Serveur(name="y", game="Palworld"))

        found = await repository.find_by(game="Palworld")

        assert [s.name for s in found] == ["y"]

    @pytest.mark.asyncio
    async def test_find_by_container(self, repository):
        await repository.save(Serveur(name="x", container="mc-x"))

        assert (await repository.find_by_container("mc-x")).name == "x"
        assert await repository.find_by_container("nope") is None

    @pytest.mark.asyncio
    async def test_query_with_bound_parameters(self, repository):
        await repository.save(Serveur(name="a", game="Minecraft"))
        await repository.save(Serveur(name="b", game="Terraria"))

        rows = await repository.query(
            "SELECT * FROM serveurs WHERE jeu = :jeu", {"jeu": "Minecraft"}
        )

        assert [s.name for s in rows] == ["a"]
        assert isinstance(rows[0], Serveur)

    @pytest.mark.asyncio
    async def test_query_parameter_is_not_interpolated(self, repository):
        await repository.save(Serveur(name="a", game="Minecraft"))

        rows = await repository.query(
            "SELECT * FROM serveurs WHERE jeu = :jeu", {"jeu": "x' OR '1'='1"}
        )

        assert rows == []

    @pytest.mark.asyncio
    async def test_find_first(self, repository):
        assert await repository.find_first() is None
        await repository.save(Serveur(name="only"))
        assert (await repository.find_first()).name == "only"


class TestRepositoryFailures:
    """A database without tables makes every operation fail."""

    @pytest_asyncio.fixture
    async def broken_session(self):
        engine = memory_engine()
        async with async_sessionmaker(engine, expire_on_commit=False)() as session:
            yield session
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_failures_raise_instead_of_defaults(self, broken_session):
        repository = BaseRepository(broken_session, Serveur)

        with pytest.raises(RepositoryError) as exc_info:
            await repository.find_all()
        assert exc_info.value.table == "serveurs"
        assert exc_info.value.operation == "find_all"

        with pytest.raises(RepositoryError):
            await repository.find_by_id(1)
        with pytest.raises(RepositoryError):
            await repository.delete(1)
        with pytest.raises(RepositoryError):
            await repository.allocate_next_id()
        with pytest.raises(RepositoryError):
            await repository.save(Serveur(name="lost"))


class TestRawSqlRepository:

    @pytest.mark.asyncio
    async def test_execute_returns_dict_rows(self, session):
        await ServeurRepository(session).save(Serveur(name="a", game="Minecraft"))

        rows = await RawSqlRepository(session).execute(
            "SELECT id, nom FROM serveurs WHERE jeu = :jeu", {"jeu": "Minecraft"}
        )

        assert rows == [{"id": 1, "nom": "a"}]

    @pytest.mark.asyncio
    async def test_statement_without_rows(self, session):
        repository = RawSqlRepository(session)
        await ServeurRepository(session).save(Serveur(name="a"))

        assert await repository.execute("UPDATE serveurs SET actif = :actif", {"actif": True}) == []
        assert (await repository.execute("SELECT actif FROM serveurs"))[0]["actif"] in (True, 1)

    @pytest.mark.asyncio
    async def test_failure_raises(self, session):
        with pytest.raises(RepositoryError):
            await RawSqlRepository(session).execute("SELECT * FROM missing_table")
