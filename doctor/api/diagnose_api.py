from __future__ import annotations

import asyncio
import html
from typing import Any, AsyncIterator, Dict

from fastapi import APIRouter, Form, HTTPException
from fastapi.responses import HTMLResponse, StreamingResponse
from pydantic import BaseModel

from doctor.client import AssetChainClient, InvalidBaseAddress
from doctor.config import default_api_url, http_timeout_s
from doctor.diagnostics.sink import QueueSink
from doctor.diagnostics.suite import diagnose
from doctor.page import form_page, progress_line, report_block

router = APIRouter(tags=["diagnose"])


class DiagnoseReq(BaseModel):
    url: str


async def _stream(url: str) -> AsyncIterator[str]:
    yield form_page(url)
    yield "<br><hr><br>"
    yield f"Please wait. Inspecting NFT API at: {html.escape(url)}<br><br>"

    try:
        client = AssetChainClient(url, timeout_s=http_timeout_s())
    except InvalidBaseAddress as e:
        yield progress_line(str(e))
        yield "</body></html>"
        return

    sink = QueueSink()

    async def _run():
        try:
            return await diagnose(url, sink=sink, client=client)
        finally:
            sink.close()
            await client.aclose()

    task = asyncio.create_task(_run())
    try:
        while True:
            line = await sink.queue.get()
            if line is None:
                break
            yield progress_line(line)
        report = await task
    finally:
        # browser went away mid-run
        if not task.done():
            task.cancel()

    yield report_block(report)
    yield "</body></html>"


@router.get("/", response_class=HTMLResponse)
def diagnose_form():
    return form_page(default_api_url()) + "</body></html>"


@router.post("/")
def diagnose_page(url: str = Form("")):
    """
    Streams per-case progress while the suite runs, then the full report.
    """
    return StreamingResponse(_stream(url.strip()), media_type="text/html; charset=utf-8")


@router.post("/v1/diagnose")
async def diagnose_json(req: DiagnoseReq) -> Dict[str, Any]:
    try:
        client = AssetChainClient(req.url, timeout_s=http_timeout_s())
    except InvalidBaseAddress as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    async with client:
        report = await diagnose(req.url, client=client)
    return {"ok": report.ok, "report": report.to_dict()}
