"""Server-Sent Events helper using Redis pub/sub."""
import json
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator
from uuid import UUID

from fastapi.responses import StreamingResponse
from redis.asyncio.client import Redis


def channel_for(player_id: UUID | str) -> str:
    return f"cadence:{player_id}"


async def event_stream(redis: Redis, channel: str, heartbeat: float = 15.0) -> AsyncIterator[str]:
    """SSE event stream for a given Redis pubsub channel."""
    pubsub = redis.pubsub()
    await pubsub.subscribe(channel)

    last_sent = datetime.now(timezone.utc)

    try:
        while True:
            # Heartbeat
            now = datetime.now(timezone.utc)
            if (now - last_sent) > timedelta(seconds=heartbeat):
                yield "event: ping\ndata: {}\n\n"
                last_sent = now

            message = await pubsub.get_message(ignore_subscribe_messages=True, timeout=1.0)
            if message and message.get("data"):
                yield f"data: {message['data']}\n\n"
                last_sent = datetime.now(timezone.utc)
    finally:
        await pubsub.unsubscribe(channel)
        await pubsub.close()


def sse_response(redis: Redis, channel: str) -> StreamingResponse:
    """Return streaming response for SSE channel."""
    return StreamingResponse(event_stream(redis, channel), media_type="text/event-stream")


async def publish_event(redis: Redis, player_id: UUID | str, payload: dict) -> None:
    """Publish event to player's SSE channel."""
    await redis.publish(channel_for(player_id), json_dumps(payload))


def json_dumps(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, default=str)
