"""
request_scope — Hello World

Three interleaved requests share one process. Each raises domain errors
from deep inside its call graph, and every error carries the id of the
request that produced it, without the id being passed around.
"""

import asyncio
import json
import logging
import uuid

from request_scope import (
    AppRequestContext,
    ConflictException,
    NotFoundException,
    RequestContext,
    report_exception,
    set_request_id,
)

WIDGETS = {"w-1": "sprocket"}

# ─── Domain code (knows nothing about requests) ───


async def load_widget(widget_id: str) -> str:
    await asyncio.sleep(0.01)  # pretend I/O
    if widget_id not in WIDGETS:
        raise NotFoundException(f"Widget {widget_id} missing", metadata={"widget_id": widget_id})
    return WIDGETS[widget_id]


async def create_widget(widget_id: str, name: str) -> None:
    await asyncio.sleep(0.01)
    if widget_id in WIDGETS:
        raise ConflictException(f"Widget {widget_id} already exists")
    WIDGETS[widget_id] = name


# ─── Boundary layer (what a web framework middleware would do) ───


async def handle(request: dict) -> dict:
    ctx = AppRequestContext(request=request, response={})

    async def chain() -> dict:
        set_request_id(request.get("x-request-id") or uuid.uuid4().hex[:8])
        try:
            if request["method"] == "GET":
                ctx.response["body"] = await load_widget(request["id"])
            else:
                await create_widget(request["id"], request["name"])
                ctx.response["body"] = "created"
            ctx.response["status"] = 200
        except (NotFoundException, ConflictException) as exc:
            ctx.response["status"] = 404 if isinstance(exc, NotFoundException) else 409
            ctx.response["body"] = report_exception(exc).to_dict()
        return ctx.response

    return await RequestContext.store.run(ctx, chain)


async def main():
    logging.basicConfig(level=logging.ERROR, format="  [log] %(message)s")

    requests = [
        {"method": "GET", "id": "w-1", "x-request-id": "req-a"},
        {"method": "GET", "id": "w-404", "x-request-id": "req-b"},
        {"method": "POST", "id": "w-1", "name": "gear", "x-request-id": "req-c"},
    ]

    print("=== Interleaved requests ===\n")
    responses = await asyncio.gather(*(handle(r) for r in requests))

    print()
    for request, response in zip(requests, responses, strict=True):
        print(f"{request['x-request-id']}: {json.dumps(response)}")


if __name__ == "__main__":
    asyncio.run(main())
