"""Tests for the AsyncSuperMessage / SuperMessage facades."""

import pytest

from super_message import AsyncSuperMessage, MemoryCache, SuperMessage

from conftest import BASE_URL, NOW, FakePlatform, api_response


def member_data(open_id: str = "open-1") -> dict:
    # far enough ahead that the real clock also treats it as valid
    return {"channelCreator": False, "expiredAt": NOW * 2, "openID": open_id}


class TestAsyncSuperMessage:
    @pytest.mark.asyncio
    async def test_verify_uses_cache(self, platform):
        client = AsyncSuperMessage("at", cache=MemoryCache(), base_url=BASE_URL, transport=platform.transport)
        platform.queue(api_response(member_data()))
        await client.verify_request_token("tok1")
        await client.verify_request_token("tok1")
        assert len(platform.requests) == 1
        assert client.cache.get("tok1").open_id == "open-1"

        client.forget_request_token("tok1")
        assert client.cache.get("tok1") is None
        await client.close()

    @pytest.mark.asyncio
    async def test_authenticate_then_push(self, platform):
        client = AsyncSuperMessage("at", base_url=BASE_URL, transport=platform.transport)
        platform.queue(api_response(member_data()), api_response({"id": 5}))

        auth = await client.authenticate({"rt": "tok1", "rte": "9999999999", "cid": "chan1"})
        message_id = await client.messages.create("tpl", 1, "Hi", recipients=[auth.member.open_id])

        assert message_id == 5
        assert platform.body()["recipients"] == ["open-1"]
        await client.close()


class TestSuperMessage:
    def test_blocking_calls(self):
        platform = FakePlatform(
            api_response(member_data()),
            api_response({"id": 77}),
            api_response(),
            api_response(),
        )
        client = SuperMessage("at", cache=MemoryCache(), base_url=BASE_URL, transport=platform.transport)
        try:
            assert client.verify_request_token("tok1").open_id == "open-1"
            assert client.authenticate("rt=tok1&rte=1&cid=chan1").member.open_id == "open-1"
            assert client.create_message("tpl", 1, "Hi", to_all=True) == 77
            client.update_message(77, "tpl", 1, "Hi again")
            client.delete_message(77)
        finally:
            client.close()

        assert [r.method for r in platform.requests] == ["GET", "POST", "PUT", "DELETE"]
