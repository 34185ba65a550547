import pytest
from httpx import ASGITransport, AsyncClient

from rendezvous.main import app
from rendezvous.services.signaling import router as signaling_router


async def _discard(message: dict) -> None:
    return None


@pytest.mark.asyncio
async def test_health_endpoint() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/api/health")
        head = await client.head("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert head.status_code == 200


@pytest.mark.asyncio
async def test_index_reports_counts() -> None:
    transport = ASGITransport(app=app)
    baseline = signaling_router.status()

    await signaling_router.connect("status-probe", _discard)
    await signaling_router.dispatch("status-probe", "join-room", {"roomId": "status-room", "username": "Probe"})
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            index = await client.get("/")
            status = await client.get("/api/status")
            head = await client.head("/")
    finally:
        await signaling_router.disconnect("status-probe")

    assert index.status_code == 200
    assert index.json() == {
        "message": "Signaling server is running",
        "activeRooms": baseline.rooms + 1,
        "activeUsers": baseline.connections + 1,
    }
    assert status.json() == {"rooms": baseline.rooms + 1, "connections": baseline.connections + 1}
    assert head.status_code == 200
    assert signaling_router.status() == baseline


@pytest.mark.asyncio
async def test_robots() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        robots = await client.get("/robots.txt")

    assert robots.status_code == 200
    assert "User-agent" in robots.text
