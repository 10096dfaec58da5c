"""
Tests for the player-count and installer clients against mocked transports.
"""

import json

import httpx
import pytest

from errors import ExternalServiceError
from models import Serveur
from services.installer import InstallerClient
from services.players import PlayersClient


def players_client(handler):
    return PlayersClient(base_url="http://status", transport=httpx.MockTransport(handler))


class TestPlayersClient:

    @pytest.mark.asyncio
    async def test_nested_payload(self):
        def handler(request):
            assert request.url.path == "/mc-survie"
            return httpx.Response(200, json={"players": {"online": 3, "max": 20}})

        count = await players_client(handler).get_players_count(Serveur(container="mc-survie"))

        assert count == 3

    @pytest.mark.asyncio
    async def test_flat_payload(self):
        client = players_client(lambda request: httpx.Response(200, json={"players_online": "7"}))
        assert await client.get_players_count(Serveur(container="x")) == 7

    @pytest.mark.asyncio
    async def test_error_status_gives_none(self):
        client = players_client(lambda request: httpx.Response(503))
        assert await client.get_players_count(Serveur(container="x")) is None

    @pytest.mark.asyncio
    async def test_garbage_gives_none(self):
        client = players_client(lambda request: httpx.Response(200, json={"players": {"online": "many"}}))
        assert await client.get_players_count(Serveur(container="x")) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[1, 2], 5, "online", {"players": [3]}])
    async def test_non_object_payload_gives_none(self, payload):
        client = players_client(lambda request: httpx.Response(200, json=payload))
        assert await client.get_players_count(Serveur(container="x")) is None

    @pytest.mark.asyncio
    async def test_not_configured(self):
        assert await PlayersClient(base_url="").get_players_count(Serveur(container="x")) is None

    @pytest.mark.asyncio
    async def test_no_container(self):
        client = players_client(lambda request: httpx.Response(200, json={"players_online": 1}))
        assert await client.get_players_count(Serveur()) is None


class TestInstallerClient:

    @pytest.mark.asyncio
    async def test_forwards_payload(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(202)

        client = InstallerClient(base_url="http://installer", transport=httpx.MockTransport(handler))

        assert await client.install({"nom_serveur": "x"}) is True
        assert seen == [("POST", "/install", {"nom_serveur": "x"})]

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = InstallerClient(base_url="http://installer",
                                 transport=httpx.MockTransport(lambda request: httpx.Response(500)))
        with pytest.raises(ExternalServiceError):
            await client.install({"nom_serveur": "x"})

    @pytest.mark.asyncio
    async def test_not_configured(self):
        client = InstallerClient(base_url="")
        assert client.enabled is False
        assert await client.install({"nom_serveur": "x"}) is False
