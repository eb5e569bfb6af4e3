from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from doctor.api.diagnose_api import router as diagnose_router
from doctor.config import bind_host, bind_port, configure_logging

app = FastAPI(title="NFT Doctor", version="1.0.0")

app.include_router(diagnose_router)


@app.get("/health")
def health():
    return {"ok": True, "service": "nft-doctor"}


def serve() -> None:
    configure_logging()
    uvicorn.run(app, host=bind_host(), port=bind_port())


if __name__ == "__main__":
    serve()
