import os

import uvicorn

from services.featured.app import app


def run(host: str = "127.0.0.1", port: int = 8010) -> None:
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run(
        host=os.getenv("RANKING_HOST", "127.0.0.1"),
        port=int(os.getenv("RANKING_PORT", "8010")),
    )
